import asyncio
import httpx
import certifi
import logging
from typing import Optional, Tuple

from explainer.utils import LedgerRequestError, ReceiptNotFoundError, TransactionNotFoundError
from .network_configs import get_network_config

logger = logging.getLogger(__name__)


async def fetch_transaction(
    txid: str,
    network: str,
    client: Optional[httpx.AsyncClient] = None,
) -> Tuple[dict, dict]:
    """Fetch the transaction and its receipt in parallel.

    Both requests must succeed. Returns (transaction, receipt) as parsed JSON.
    """
    cfg = get_network_config(network)
    tx_url, receipt_url = cfg["api"](txid)

    if client is not None:
        return await _fetch_pair(client, txid, network, tx_url, receipt_url)
    async with httpx.AsyncClient(verify=certifi.where()) as own_client:
        return await _fetch_pair(own_client, txid, network, tx_url, receipt_url)


async def _fetch_pair(client: httpx.AsyncClient, txid: str, key: str, tx_url: str, receipt_url: str):
    request_headers = {"Accept": "application/json"}
    # Both requests settle before any error is raised
    tx_res, receipt_res = await asyncio.gather(
        client.get(tx_url, headers=request_headers),
        client.get(receipt_url, headers=request_headers),
        return_exceptions=True,
    )
    for outcome in (tx_res, receipt_res):
        if isinstance(outcome, httpx.RequestError):
            logger.warning(f"[{key}] request error → {outcome}. API: {tx_url}")
            raise LedgerRequestError(original_error=outcome) from outcome
        if isinstance(outcome, BaseException):
            raise outcome

    logger.debug(f"[{key}] status codes: transaction={tx_res.status_code}, receipt={receipt_res.status_code}")

    # Transaction failure is reported before receipt failure
    if not tx_res.is_success:
        logger.warning(f"[{key}] transaction lookup failed (status {tx_res.status_code}): {txid}")
        raise TransactionNotFoundError(txid, status_code=tx_res.status_code)
    if not receipt_res.is_success:
        logger.warning(f"[{key}] receipt lookup failed (status {receipt_res.status_code}): {txid}")
        raise ReceiptNotFoundError(txid, status_code=receipt_res.status_code)

    tx = _parse_json(tx_res, key)
    receipt = _parse_json(receipt_res, key)

    # Thor answers 200 with a null body for unknown (or still pending) transactions
    if tx is None:
        logger.debug(f"[{key}] transaction body is null: {txid}")
        raise TransactionNotFoundError(txid, status_code=tx_res.status_code)
    if receipt is None:
        logger.debug(f"[{key}] receipt body is null: {txid}")
        raise ReceiptNotFoundError(txid, status_code=receipt_res.status_code)

    return tx, receipt


def _parse_json(res: httpx.Response, key: str):
    try:
        return res.json()
    except ValueError as e:
        logger.warning(f"[{key}] JSON parse failed → {e}. Body: {res.text[:200]}")
        raise LedgerRequestError(original_error=e) from e

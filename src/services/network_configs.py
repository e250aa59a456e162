#network_configs.py

from decimal import Decimal, ROUND_HALF_UP
from urllib.parse import quote

from explainer.configuration import config
from explainer.models import CONTRACT_CREATION, TechnicalSummary, TransactionStatus
from explainer.utils import NormalizationFailedError, UnsupportedNetworkError

WEI_PER_VET = Decimal(10**18)
FOUR_PLACES = Decimal("0.0001")


def format_token_amount(raw_value, symbol: str = "VET") -> str:
    """Hex wei string (or int) -> '1.0000 VET'. No value -> '0 VET'."""
    if not raw_value:
        return f"0 {symbol}"
    wei = int(raw_value, 16) if isinstance(raw_value, str) else int(raw_value)
    amount = (Decimal(wei) / WEI_PER_VET).quantize(FOUR_PLACES, rounding=ROUND_HALF_UP)
    return f"{amount:f} {symbol}"


def normalize_vechain_transaction(tx: dict, receipt: dict, symbol: str = "VET") -> TechnicalSummary:
    """Normalize a Thor transaction + receipt pair.

    Only the first clause is looked at. Optional fields fall back to defaults;
    receipt metadata and gasUsed are required and raise NormalizationFailedError.
    """
    if not isinstance(tx, dict):
        raise NormalizationFailedError("transaction")
    if not isinstance(receipt, dict):
        raise NormalizationFailedError("receipt")

    meta = receipt.get("meta")
    if not isinstance(meta, dict) or meta.get("blockNumber") is None or meta.get("blockTimestamp") is None:
        raise NormalizationFailedError("meta")
    if receipt.get("gasUsed") is None:
        raise NormalizationFailedError("gasUsed")

    clauses = tx.get("clauses") or []
    clause = clauses[0] if clauses and isinstance(clauses[0], dict) else {}

    try:
        value = format_token_amount(clause.get("value"), symbol)
        block_number = int(meta["blockNumber"])
        timestamp = int(meta["blockTimestamp"])
    except (TypeError, ValueError) as e:
        raise NormalizationFailedError("value", original_error=e) from e

    gas = tx.get("gas")
    return TechnicalSummary(
        from_address=tx.get("origin") or "Unknown",
        to_address=clause.get("to") or CONTRACT_CREATION,
        value=value,
        gas_limit=str(gas) if gas is not None else "N/A",
        gas_used=str(receipt["gasUsed"]),
        status=TransactionStatus.FAILED if receipt.get("reverted") else TransactionStatus.SUCCESS,
        block_number=block_number,
        timestamp=timestamp,
    )


def _thor_api(base_url: str):
    """Thor REST exposes the transaction and its receipt at two sibling paths"""
    base = base_url.rstrip("/")
    return lambda txid: (
        f"{base}/transactions/{quote(txid, safe='')}",
        f"{base}/transactions/{quote(txid, safe='')}/receipt",
    )


def get_network_configs():
    return {
        "mainnet": {
            "name": "VeChain Mainnet",
            "symbol": "VET",
            "explorer": "https://vechainstats.com/transaction/",
            "api": _thor_api(config.VECHAIN_MAINNET_URL),
            "normalize": normalize_vechain_transaction,
        },
        "testnet": {
            "name": "VeChain Testnet",
            "symbol": "VET",
            "explorer": "https://explore-testnet.vechain.org/transactions/",
            "api": _thor_api(config.VECHAIN_TESTNET_URL),
            "normalize": normalize_vechain_transaction,
        },
    }


def get_network_config(network: str) -> dict:
    configs = get_network_configs()
    if network not in configs:
        raise UnsupportedNetworkError(network)
    return configs[network]

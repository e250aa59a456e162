"""
Explanation service - hash in, ExplanationResult out
"""
import logging
from typing import Optional

import httpx
from langsmith import traceable

from explainer.fallback import fallback_explanation
from explainer.generator import generate_explanation
from explainer.markup import render_explanation_html
from explainer.models import ExplanationResult, ExplanationSource, RawPayload
from explainer.utils import GenerationFailedError, InvalidHashFormatError, is_valid_transaction_hash
from .network_configs import get_network_config
from .transaction_service import fetch_transaction

logger = logging.getLogger(__name__)


@traceable(name="explain_transaction", run_type="chain")
async def explain_transaction(
    tx_hash: str,
    network: str,
    client: Optional[httpx.AsyncClient] = None,
) -> ExplanationResult:
    """Fetch, normalize and explain one transaction.

    Ledger and normalization errors propagate as ExplainerError subclasses.
    Completion API failures are absorbed by the rule-based fallback.
    """
    if not is_valid_transaction_hash(tx_hash):
        raise InvalidHashFormatError(tx_hash)

    cfg = get_network_config(network)
    logger.info(f"[{network}] explaining transaction {tx_hash[:20]}...")

    tx, receipt = await fetch_transaction(tx_hash, network, client=client)
    technical = cfg["normalize"](tx, receipt, cfg["symbol"])

    try:
        explanation = await generate_explanation(tx, receipt, network, client=client)
        source = ExplanationSource.AI
    except GenerationFailedError as e:
        logger.info(f"[{network}] using fallback explanation ({e.reason})")
        explanation = fallback_explanation(tx, receipt, technical, cfg["symbol"])
        source = ExplanationSource.FALLBACK

    logger.info(f"[{network}] explanation ready: source={source.value}, status={technical.status.value}")
    return ExplanationResult(
        hash=tx_hash,
        network=network,
        explanation=explanation,
        explanation_html=render_explanation_html(explanation),
        source=source,
        technical=technical,
        raw=RawPayload(transaction=tx, receipt=receipt),
        explorer_url=f"{cfg['explorer']}{tx_hash}",
    )

"""
Rule-based explanation used when the completion API fails.

Never touches the network and never raises.
"""
import logging

from .models import TechnicalSummary, TransactionStatus
from .utils import shorten_address

logger = logging.getLogger(__name__)

# VeChain Energy (VTHO) built-in contract
VTHO_CONTRACT_ADDRESS = "0x0000000000000000000000000000456e65726779"


def _first_clause_recipient(tx: dict):
    clauses = tx.get("clauses") if isinstance(tx, dict) else None
    if not clauses or not isinstance(clauses[0], dict):
        return None
    return clauses[0].get("to")


def fallback_explanation(tx: dict, receipt: dict, summary: TechnicalSummary, symbol: str = "VET") -> str:
    """Pick the first matching rule: reverted, VTHO contract, value transfer, contract call."""
    reverted = bool(receipt.get("reverted")) if isinstance(receipt, dict) else summary.status == TransactionStatus.FAILED
    recipient = _first_clause_recipient(tx)

    if reverted:
        rule = "reverted"
        text = f"This transaction failed and was reverted. {summary.gas_used} gas was consumed in the process."
    elif isinstance(recipient, str) and recipient.lower() == VTHO_CONTRACT_ADDRESS:
        rule = "vtho"
        text = "This transaction interacted with the VeChain Energy (VTHO) contract, likely transferring VTHO tokens."
    elif summary.value != f"0 {symbol}":
        # Fallback prose shortens addresses; the AI prose keeps them whole
        rule = "transfer"
        text = (
            f"This transaction successfully transferred {summary.value} "
            f"from {shorten_address(summary.from_address)} to {shorten_address(summary.to_address)}."
        )
    else:
        rule = "contract_call"
        text = (
            f"This transaction executed a smart contract function. "
            f"No {symbol} was transferred, but {summary.gas_used} gas was consumed."
        )

    logger.debug(f"[fallback] rule={rule}")
    return text

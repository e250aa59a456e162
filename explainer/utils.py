"""
Helpers shared by the explanation pipeline
"""
import logging
from typing import Optional

logger = logging.getLogger(__name__)

TX_HASH_PREFIX = "0x"
TX_HASH_LENGTH = 66

GENERIC_FETCH_ERROR = "Failed to fetch transaction"


def is_valid_transaction_hash(tx_hash: str) -> bool:
    """Check the shape of a transaction hash (0x prefix + 64 chars).

    Only length and prefix are checked; the characters themselves are not.
    """
    if not isinstance(tx_hash, str):
        return False
    return len(tx_hash) == TX_HASH_LENGTH and tx_hash.startswith(TX_HASH_PREFIX)


def shorten_address(address: str) -> str:
    """0x1234567890...abcd -> 0x1234...abcd"""
    return f"{address[:6]}...{address[-4:]}"


# ========== Error handling ==========

class ExplainerError(Exception):
    """Base error for the explanation pipeline"""
    def __init__(self, message: str, stage: str = "unknown", original_error: Optional[Exception] = None):
        self.message = message
        self.stage = stage
        self.original_error = original_error
        super().__init__(self.message)


class InvalidHashFormatError(ExplainerError):
    def __init__(self, tx_hash: str):
        super().__init__("Invalid transaction hash format", stage="validate")
        self.tx_hash = tx_hash


class UnsupportedNetworkError(ExplainerError):
    def __init__(self, network: str):
        super().__init__(f"Unsupported network: {network}", stage="network")
        self.network = network


class TransactionNotFoundError(ExplainerError):
    def __init__(self, tx_hash: str, status_code: Optional[int] = None):
        super().__init__("Transaction not found", stage="ledger")
        self.tx_hash = tx_hash
        self.status_code = status_code


class ReceiptNotFoundError(ExplainerError):
    def __init__(self, tx_hash: str, status_code: Optional[int] = None):
        super().__init__("Transaction receipt not found", stage="ledger")
        self.tx_hash = tx_hash
        self.status_code = status_code


class LedgerRequestError(ExplainerError):
    """Transport failure or unreadable body from the ledger"""
    def __init__(self, original_error: Optional[Exception] = None):
        super().__init__(GENERIC_FETCH_ERROR, stage="ledger", original_error=original_error)


class NormalizationFailedError(ExplainerError):
    """A field required for display is missing from the ledger payload"""
    def __init__(self, field: str, original_error: Optional[Exception] = None):
        super().__init__(GENERIC_FETCH_ERROR, stage="normalize", original_error=original_error)
        self.field = field


class GenerationFailedError(ExplainerError):
    """The completion API could not produce an explanation. Never shown to the user."""
    def __init__(self, reason: str, original_error: Optional[Exception] = None):
        super().__init__(f"Explanation generation failed: {reason}", stage="generate", original_error=original_error)
        self.reason = reason

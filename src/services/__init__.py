# Services package
from .network_configs import get_network_configs, get_network_config, normalize_vechain_transaction
from .transaction_service import fetch_transaction
from .explain_service import explain_transaction
from .query_service import DebounceTimer, QueryController

__all__ = [
    "get_network_configs",
    "get_network_config",
    "normalize_vechain_transaction",
    "fetch_transaction",
    "explain_transaction",
    "DebounceTimer",
    "QueryController",
]

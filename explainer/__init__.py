"""
Transaction explainer package
"""
from .configuration import config, ExplainerConfiguration
from .fallback import fallback_explanation, VTHO_CONTRACT_ADDRESS
from .generator import generate_explanation
from .markup import render_explanation_html
from .models import (
    CONTRACT_CREATION,
    ExplanationResult,
    ExplanationSource,
    QueryState,
    TechnicalSummary,
    TransactionStatus,
    get_default_query_state,
)
from .utils import ExplainerError, is_valid_transaction_hash

__all__ = [
    'config',
    'ExplainerConfiguration',
    'fallback_explanation',
    'VTHO_CONTRACT_ADDRESS',
    'generate_explanation',
    'render_explanation_html',
    'CONTRACT_CREATION',
    'ExplanationResult',
    'ExplanationSource',
    'QueryState',
    'TechnicalSummary',
    'TransactionStatus',
    'get_default_query_state',
    'ExplainerError',
    'is_valid_transaction_hash',
]

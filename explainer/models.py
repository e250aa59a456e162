"""
Type definitions for the explanation pipeline
"""
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional, TypedDict

from pydantic import BaseModel, ConfigDict, Field

CONTRACT_CREATION = "Contract Creation"


class TransactionStatus(str, Enum):
    """Execution outcome taken from the receipt"""
    SUCCESS = "Success"
    FAILED = "Failed"


class ExplanationSource(str, Enum):
    """Where the explanation prose came from"""
    AI = "ai"
    FALLBACK = "fallback"


class TechnicalSummary(BaseModel):
    """Display-ready technical fields of one transaction"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    from_address: str = Field(alias="from", description="Origin (sender) address")
    to_address: str = Field(alias="to", description="Recipient of the first clause, or 'Contract Creation'")
    value: str = Field(description="Formatted amount with unit, e.g. '1.0000 VET'")
    gas_limit: str = Field(alias="gasLimit")
    gas_used: str = Field(alias="gasUsed")
    status: TransactionStatus
    block_number: int = Field(alias="blockNumber")
    timestamp: int = Field(description="Block timestamp, seconds since epoch")

    @property
    def formatted_block_number(self) -> str:
        return f"{self.block_number:,}"

    @property
    def formatted_timestamp(self) -> str:
        return datetime.fromtimestamp(self.timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")


class RawPayload(BaseModel):
    """Ledger responses exactly as received"""
    transaction: dict[str, Any]
    receipt: dict[str, Any]


class ExplanationResult(BaseModel):
    """Outcome of one successful query"""
    hash: str
    network: str
    explanation: str = Field(description="Markdown-like prose")
    explanation_html: str = Field(description="Prose rendered to an HTML fragment")
    source: ExplanationSource
    technical: TechnicalSummary
    raw: RawPayload
    explorer_url: Optional[str] = None


class QueryState(TypedDict):
    """Single active query, owned by the presentation boundary"""
    hash: str
    network: str
    loading: bool
    error: Optional[str]
    result: Optional[ExplanationResult]


def get_default_query_state(network: str = "mainnet") -> QueryState:
    return {
        "hash": "",
        "network": network,
        "loading": False,
        "error": None,
        "result": None,
    }

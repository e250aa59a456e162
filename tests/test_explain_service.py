"""Tests for the end-to-end explanation pipeline."""

import httpx
import pytest

from explainer.models import ExplanationSource, TransactionStatus
from explainer.utils import (
    InvalidHashFormatError,
    NormalizationFailedError,
    ReceiptNotFoundError,
    TransactionNotFoundError,
    UnsupportedNetworkError,
)
from src.services.explain_service import explain_transaction

SENDER = "0x2d7c8293b20344223668ed3fd88301381dc35ce0"
RECIPIENT = "0x11e1b586dd371471d0b52046ee3d4309a6c29c6c"


def _completion(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.mark.asyncio
async def test_ai_path(api_key, thor_handler, tx_hash, raw_transaction, raw_receipt):
    prose = f"Sent **1 VET** from {SENDER} to {RECIPIENT} in block #12345678."
    handler = thor_handler(completion=_completion(prose))
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await explain_transaction(tx_hash, "mainnet", client=client)

    assert result.source == ExplanationSource.AI
    assert result.explanation == prose
    assert result.hash == tx_hash
    assert result.network == "mainnet"
    assert result.technical.value == "1.0000 VET"
    assert result.technical.status == TransactionStatus.SUCCESS
    assert result.raw.transaction == raw_transaction
    assert result.raw.receipt == raw_receipt
    assert result.explorer_url == f"https://vechainstats.com/transaction/{tx_hash}"


@pytest.mark.asyncio
async def test_ai_path_renders_full_addresses(api_key, thor_handler, tx_hash):
    prose = f"From **{SENDER}** to {RECIPIENT}."
    handler = thor_handler(completion=_completion(prose))
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await explain_transaction(tx_hash, "mainnet", client=client)

    assert f">{SENDER}</code>" in result.explanation_html
    assert f">{RECIPIENT}</code>" in result.explanation_html
    assert "..." not in result.explanation_html


@pytest.mark.asyncio
async def test_fallback_path_truncates_addresses(api_key, thor_handler, tx_hash):
    handler = thor_handler(completion_status=500, completion={"error": "overloaded"})
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await explain_transaction(tx_hash, "mainnet", client=client)

    assert result.source == ExplanationSource.FALLBACK
    assert result.explanation == "This transaction successfully transferred 1.0000 VET from 0x2d7c...5ce0 to 0x11e1...9c6c."
    assert SENDER not in result.explanation_html
    assert RECIPIENT not in result.explanation_html
    assert "<code" not in result.explanation_html


@pytest.mark.asyncio
async def test_generation_failure_is_never_surfaced(api_key, thor_handler, tx_hash, raw_receipt):
    raw_receipt["reverted"] = True
    handler = thor_handler(receipt=raw_receipt, completion=_completion(""))
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await explain_transaction(tx_hash, "mainnet", client=client)

    assert result.source == ExplanationSource.FALLBACK
    assert result.technical.status == TransactionStatus.FAILED
    assert result.explanation.startswith("This transaction failed and was reverted.")


@pytest.mark.asyncio
async def test_missing_api_key_uses_fallback_without_calling_api(no_api_key, thor_handler, tx_hash):
    calls: list[httpx.Request] = []
    async with httpx.AsyncClient(transport=httpx.MockTransport(thor_handler(calls=calls))) as client:
        result = await explain_transaction(tx_hash, "mainnet", client=client)

    assert result.source == ExplanationSource.FALLBACK
    assert all(request.method == "GET" for request in calls)
    assert len(calls) == 2


@pytest.mark.asyncio
async def test_invalid_hash_makes_no_network_call():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(InvalidHashFormatError):
            await explain_transaction("0x1234", "mainnet", client=client)
    assert calls == []


@pytest.mark.asyncio
async def test_unsupported_network(tx_hash):
    with pytest.raises(UnsupportedNetworkError):
        await explain_transaction(tx_hash, "devnet")


@pytest.mark.asyncio
async def test_ledger_errors_propagate(api_key, thor_handler, tx_hash):
    async with httpx.AsyncClient(transport=httpx.MockTransport(thor_handler(tx_status=404))) as client:
        with pytest.raises(TransactionNotFoundError):
            await explain_transaction(tx_hash, "mainnet", client=client)

    async with httpx.AsyncClient(transport=httpx.MockTransport(thor_handler(receipt_status=404))) as client:
        with pytest.raises(ReceiptNotFoundError):
            await explain_transaction(tx_hash, "mainnet", client=client)


@pytest.mark.asyncio
async def test_missing_receipt_meta_is_generic_fetch_failure(api_key, thor_handler, tx_hash, raw_receipt):
    del raw_receipt["meta"]
    calls: list[httpx.Request] = []
    handler = thor_handler(receipt=raw_receipt, calls=calls)
    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        with pytest.raises(NormalizationFailedError) as exc_info:
            await explain_transaction(tx_hash, "mainnet", client=client)

    assert exc_info.value.message == "Failed to fetch transaction"
    assert all(request.method == "GET" for request in calls)


@pytest.mark.asyncio
async def test_result_serializes_for_presentation(api_key, thor_handler, tx_hash):
    async with httpx.AsyncClient(transport=httpx.MockTransport(thor_handler())) as client:
        result = await explain_transaction(tx_hash, "mainnet", client=client)

    dumped = result.model_dump(mode="json", by_alias=True)
    assert dumped["source"] == "ai"
    assert dumped["technical"]["from"] == SENDER
    assert dumped["technical"]["gasLimit"] == "21000"
    assert dumped["explanation_html"] == "<p>AI explanation</p>"

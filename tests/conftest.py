"""Shared fixtures: Thor payloads and a fake ledger/completion transport."""

import httpx
import pytest

from explainer.configuration import ExplainerConfiguration

TX_HASH = "0x" + "a1" * 32
SENDER = "0x2d7c8293b20344223668ed3fd88301381dc35ce0"
RECIPIENT = "0x11e1b586dd371471d0b52046ee3d4309a6c29c6c"
COMPLETION_URL = "https://completion.test/v1/chat/completions"

_DEFAULT = object()


@pytest.fixture
def tx_hash() -> str:
    return TX_HASH


@pytest.fixture
def raw_transaction() -> dict:
    return {
        "id": TX_HASH,
        "origin": SENDER,
        "gas": 21000,
        "clauses": [{"to": RECIPIENT, "value": "0xde0b6b3a7640000", "data": "0x"}],
    }


@pytest.fixture
def raw_receipt() -> dict:
    return {
        "gasUsed": 21000,
        "reverted": False,
        "meta": {"blockNumber": 12345678, "blockTimestamp": 1700000000},
        "outputs": [],
    }


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    monkeypatch.setattr(ExplainerConfiguration, "MISTRAL_API_KEY", "test-key")
    monkeypatch.setattr(ExplainerConfiguration, "COMPLETION_API_URL", COMPLETION_URL)
    monkeypatch.setattr(ExplainerConfiguration, "EXPLAINER_MODEL", "mistral-large-latest")
    monkeypatch.setattr(ExplainerConfiguration, "EXPLAINER_MAX_TOKENS", 500)
    monkeypatch.setattr(ExplainerConfiguration, "EXPLAINER_TEMPERATURE", 0.2)
    return "test-key"


@pytest.fixture
def no_api_key(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(ExplainerConfiguration, "MISTRAL_API_KEY", None)


def completion_body(content) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def _json_response(status_code: int, body) -> httpx.Response:
    if body is None:
        return httpx.Response(status_code, content=b"null", headers={"content-type": "application/json"})
    return httpx.Response(status_code, json=body)


@pytest.fixture
def thor_handler(raw_transaction, raw_receipt):
    """Build a MockTransport handler serving Thor REST and the completion API.

    Every request is appended to `calls` when a list is given.
    """

    def _build(
        tx=_DEFAULT,
        receipt=_DEFAULT,
        tx_status: int = 200,
        receipt_status: int = 200,
        completion_status: int = 200,
        completion=_DEFAULT,
        calls: list | None = None,
    ):
        tx_body = raw_transaction if tx is _DEFAULT else tx
        receipt_body = raw_receipt if receipt is _DEFAULT else receipt
        completion_json = completion_body("AI explanation") if completion is _DEFAULT else completion

        def handler(request: httpx.Request) -> httpx.Response:
            if calls is not None:
                calls.append(request)
            if str(request.url) == COMPLETION_URL:
                return _json_response(completion_status, completion_json)
            path = request.url.path
            if path.endswith("/receipt"):
                return _json_response(receipt_status, receipt_body)
            if path.startswith("/transactions/"):
                return _json_response(tx_status, tx_body)
            return httpx.Response(404)

        return handler

    return _build

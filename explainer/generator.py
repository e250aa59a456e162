"""
Explanation generator - asks the completion API to explain a transaction
"""
import logging
from typing import Optional

import certifi
import httpx
from langsmith import traceable

from .configuration import config
from .prompts import get_explanation_prompt
from .utils import GenerationFailedError

logger = logging.getLogger(__name__)


def _extract_content(data: dict) -> Optional[str]:
    """choices[0].message.content, or None when absent or blank"""
    choices = data.get("choices") if isinstance(data, dict) else None
    if not choices or not isinstance(choices, list):
        return None
    message = choices[0].get("message") if isinstance(choices[0], dict) else None
    content = message.get("content") if isinstance(message, dict) else None
    if not isinstance(content, str) or not content.strip():
        return None
    return content


async def _request_completion(client: httpx.AsyncClient, prompt: str, llm_config: dict) -> str:
    headers = {
        "Content-Type": "application/json",
        "Accept": "application/json",
        "Authorization": f"Bearer {llm_config['api_key']}",
    }
    payload = {
        "model": llm_config["model"],
        "messages": [{"role": "user", "content": prompt}],
        "max_tokens": llm_config["max_tokens"],
        "temperature": llm_config["temperature"],
    }

    try:
        res = await client.post(llm_config["url"], json=payload, headers=headers, timeout=llm_config["timeout"])
        logger.debug(f"[completion] status code: {res.status_code}")
        res.raise_for_status()
    except httpx.HTTPStatusError as e:
        logger.warning(f"[completion] HTTP error (status {e.response.status_code}) → falling back")
        raise GenerationFailedError(f"completion API returned {e.response.status_code}", original_error=e) from e
    except httpx.RequestError as e:
        logger.warning(f"[completion] request error → {e}. Falling back")
        raise GenerationFailedError("completion API unreachable", original_error=e) from e

    try:
        data = res.json()
    except ValueError as e:
        logger.warning(f"[completion] JSON parse failed → {e}. Body: {res.text[:200]}")
        raise GenerationFailedError("completion API returned invalid JSON", original_error=e) from e

    content = _extract_content(data)
    if content is None:
        logger.warning("[completion] response had no usable content → falling back")
        raise GenerationFailedError("empty completion")
    return content


@traceable(name="generate_explanation", run_type="llm")
async def generate_explanation(
    tx: dict,
    receipt: dict,
    network: str,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """Generate prose for a transaction with one completion request.

    Raises GenerationFailedError on any failure; there is no retry.
    """
    llm_config = config.get_completion_config()
    if not llm_config["api_key"]:
        logger.warning("MISTRAL_API_KEY is not set, skipping the completion API")
        raise GenerationFailedError("missing API key")

    prompt = get_explanation_prompt(tx, receipt, network)
    logger.debug(f"[completion] prompt length: {len(prompt)} chars, model={llm_config['model']}")

    if client is not None:
        return await _request_completion(client, prompt, llm_config)
    async with httpx.AsyncClient(verify=certifi.where()) as own_client:
        return await _request_completion(own_client, prompt, llm_config)

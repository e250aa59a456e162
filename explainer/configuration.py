"""
Explainer settings management.

All values come from environment variables (a local .env file is loaded first).
"""
import os
import logging
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)
logger.propagate = True


class ExplainerConfiguration:
    """Explainer settings"""

    # ========== Completion API ==========
    _DEFAULT_MODEL: str = "mistral-large-latest"
    _DEFAULT_COMPLETION_API_URL: str = "https://api.mistral.ai/v1/chat/completions"

    EXPLAINER_MODEL: str = os.getenv("EXPLAINER_MODEL", _DEFAULT_MODEL)
    EXPLAINER_TEMPERATURE: float = float(os.getenv("EXPLAINER_TEMPERATURE", "0.2"))
    EXPLAINER_MAX_TOKENS: int = int(os.getenv("EXPLAINER_MAX_TOKENS", "500"))
    EXPLAINER_TIMEOUT: float = float(os.getenv("EXPLAINER_TIMEOUT", "30.0"))
    COMPLETION_API_URL: str = os.getenv("COMPLETION_API_URL", _DEFAULT_COMPLETION_API_URL)

    MISTRAL_API_KEY: Optional[str] = os.getenv("MISTRAL_API_KEY")

    # ========== Ledger (VeChain Thor REST) ==========
    VECHAIN_MAINNET_URL: str = os.getenv("VECHAIN_MAINNET_URL", "https://mainnet.vechain.org")
    VECHAIN_TESTNET_URL: str = os.getenv("VECHAIN_TESTNET_URL", "https://testnet.vechain.org")
    DEFAULT_NETWORK: str = os.getenv("DEFAULT_NETWORK", "mainnet")

    # ========== Query handling ==========
    QUERY_DEBOUNCE_SECONDS: float = float(os.getenv("QUERY_DEBOUNCE_SECONDS", "0.5"))

    # ========== Misc ==========
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @classmethod
    def validate(cls) -> bool:
        """Check settings. A missing API key only disables the AI path."""
        if not cls.MISTRAL_API_KEY:
            logger.warning("MISTRAL_API_KEY is not set. Explanations will use the rule-based fallback.")
        if cls.DEFAULT_NETWORK not in ("mainnet", "testnet"):
            raise ValueError(f"DEFAULT_NETWORK must be 'mainnet' or 'testnet', got '{cls.DEFAULT_NETWORK}'")
        return True

    @classmethod
    def get_completion_config(cls) -> dict:
        """Return the request settings for the completion API"""
        return {
            "url": cls.COMPLETION_API_URL,
            "model": cls.EXPLAINER_MODEL or cls._DEFAULT_MODEL,
            "max_tokens": cls.EXPLAINER_MAX_TOKENS,
            "temperature": cls.EXPLAINER_TEMPERATURE,
            "timeout": cls.EXPLAINER_TIMEOUT,
            "api_key": cls.MISTRAL_API_KEY,
        }


# Global settings instance
config = ExplainerConfiguration()

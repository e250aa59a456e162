"""
API router (transaction explanation, networks)
"""
from fastapi.responses import JSONResponse

from src.services.explain_service import explain_transaction
from src.services.network_configs import get_network_configs
from explainer.configuration import config
from explainer.utils import (
    GENERIC_FETCH_ERROR,
    ExplainerError,
    InvalidHashFormatError,
    ReceiptNotFoundError,
    TransactionNotFoundError,
    UnsupportedNetworkError,
)
import logging

logger = logging.getLogger(__name__)

ERROR_STATUS_CODES = {
    InvalidHashFormatError: 400,
    UnsupportedNetworkError: 400,
    TransactionNotFoundError: 404,
    ReceiptNotFoundError: 404,
}


def error_status_code(error: ExplainerError) -> int:
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(error, error_type):
            return status_code
    return 502


def register_api_routes(app):
    """Register the API routes on the FastAPI app"""

    @app.get("/api/tx/{txid}")
    async def get_transaction(txid: str, network: str = config.DEFAULT_NETWORK):
        """Transaction explanation API"""
        try:
            result = await explain_transaction(txid, network)
        except ExplainerError as e:
            logger.info(f"[{network}] lookup failed at stage '{e.stage}': {e.message}")
            return JSONResponse(
                status_code=error_status_code(e),
                content={"found": False, "message": e.message}
            )
        except Exception as e:
            logger.error(f"[{network}] transaction API error: {e}", exc_info=True)
            return JSONResponse(
                status_code=500,
                content={"found": False, "message": GENERIC_FETCH_ERROR}
            )
        return JSONResponse(content={"found": True, "result": result.model_dump(mode="json", by_alias=True)})

    @app.get("/api/networks")
    async def get_networks():
        """Supported networks API"""
        networks = [
            {
                "key": key,
                "name": cfg["name"],
                "symbol": cfg["symbol"],
                "explorer": cfg["explorer"],
            }
            for key, cfg in get_network_configs().items()
        ]
        return JSONResponse(content={"networks": networks})

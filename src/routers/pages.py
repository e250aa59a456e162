"""
Pages router (explorer page)
"""
from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from src.services.explain_service import explain_transaction
from src.services.network_configs import get_network_configs
from explainer.configuration import config
from explainer.utils import GENERIC_FETCH_ERROR, ExplainerError
import logging

logger = logging.getLogger(__name__)


def register_pages_routes(app, templates: Jinja2Templates):
    """Register the page routes on the FastAPI app"""

    @app.get("/", response_class=HTMLResponse)
    async def home(request: Request, hash: str = "", network: str = config.DEFAULT_NETWORK):
        """Explorer page; renders the explanation when a hash is given"""
        tx_hash = hash.strip()
        result = None
        error = None

        if tx_hash:
            try:
                result = await explain_transaction(tx_hash, network)
            except ExplainerError as e:
                error = e.message
            except Exception as e:
                logger.error(f"[{network}] page lookup error: {e}", exc_info=True)
                error = GENERIC_FETCH_ERROR

        networks = [{"key": key, "name": cfg["name"]} for key, cfg in get_network_configs().items()]
        return templates.TemplateResponse(
            request,
            "pages/explorer.html",
            {
                "networks": networks,
                "selected_network": network,
                "tx_hash": tx_hash,
                "result": result,
                "error": error,
            },
        )

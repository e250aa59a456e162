import uvicorn
import os
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from fastapi import FastAPI
from fastapi.templating import Jinja2Templates
from fastapi.middleware.cors import CORSMiddleware

from src.routers.api import register_api_routes
from src.routers.pages import register_pages_routes
from src.routers.utility import register_utility_routes

from explainer import config

load_dotenv()

# --- Environment detection ---
ENVIRONMENT = os.getenv("ENVIRONMENT", "production").lower()
DEBUG_MODE = ENVIRONMENT == "development"
RELOAD_ENABLED = os.getenv("RELOAD", "false").lower() == "true" if DEBUG_MODE else False

if DEBUG_MODE:
    default_log_level = "DEBUG"
else:
    default_log_level = "INFO"

# --- LangSmith tracing ---
langsmith_tracing = os.getenv("LANGSMITH_TRACING", "false").lower() == "true"
langsmith_api_key = os.getenv("LANGSMITH_API_KEY")
langsmith_project = os.getenv("LANGSMITH_PROJECT", "vechain-tx-explainer")
langsmith_endpoint = os.getenv("LANGSMITH_ENDPOINT", "https://api.smith.langchain.com")

if langsmith_tracing and langsmith_api_key:
    os.environ["LANGCHAIN_TRACING_V2"] = "true"
    os.environ["LANGCHAIN_ENDPOINT"] = langsmith_endpoint
    os.environ["LANGCHAIN_API_KEY"] = langsmith_api_key
    os.environ["LANGCHAIN_PROJECT"] = langsmith_project

# --- Logging ---
log_level_str = os.getenv("LOG_LEVEL", default_log_level).upper()
log_level = getattr(logging, log_level_str, logging.INFO)

logging.basicConfig(
    level=log_level,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
    handlers=[logging.StreamHandler(sys.stdout)],
    force=True
)

httpx_logger = logging.getLogger("httpx")
httpx_logger.setLevel(logging.WARNING)
httpx_logger.propagate = True

for logger_name in ["uvicorn", "uvicorn.access", "uvicorn.error", "explainer", "src"]:
    logger_instance = logging.getLogger(logger_name)
    logger_instance.setLevel(log_level)
    logger_instance.propagate = True
    logger_instance.handlers.clear()

logger = logging.getLogger(__name__)

logger.info("="*60)
logger.info(f"Logging initialized - level: {log_level_str}")
if langsmith_tracing and langsmith_api_key:
    logger.info(f"LangSmith tracing enabled - project: {langsmith_project}")
elif langsmith_tracing:
    logger.warning("⚠️ LANGSMITH_TRACING is on but LANGSMITH_API_KEY is not set")
logger.info("="*60)

# --- FastAPI app ---
app = FastAPI(title="VeChain Transaction Explainer", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


@app.on_event("startup")
async def startup_event():
    config.validate()
    logger.info(f"✅ Server ready (default network: {config.DEFAULT_NETWORK})")


register_api_routes(app)
register_pages_routes(app, templates)
register_utility_routes(app)


if __name__ == "__main__":
    log_level_uvicorn = log_level_str.lower()
    host = "127.0.0.1" if DEBUG_MODE else os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))

    logger.info(f"Starting server (host: {host}, port: {port})")
    uvicorn.run("main:app", host=host, port=port, log_level=log_level_uvicorn, use_colors=False, access_log=True, reload=RELOAD_ENABLED)

import logging
import os

import uvicorn
from codecarbon import EmissionsTracker
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from project_planner.config import env_flag, load_env_file

# Settings are read at import time across modules, so .env goes in first.
load_env_file()

from api import state  # noqa: E402
from api.routers import ops, projects  # noqa: E402
from llm.llm_client import LLMClient  # noqa: E402
from llm.providers.factory import build_provider  # noqa: E402
from storage import db  # noqa: E402
from storage.project_store import ProjectStore  # noqa: E402

# Logging configuration
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(message)s"
)
logger = logging.getLogger(__name__)

PORT = int(os.getenv("PORT", "5000"))
DB_INIT_SCHEMA = env_flag("DB_INIT_SCHEMA")
CARBON_TRACKING = env_flag("CARBON_TRACKING")
PROMETHEUS_PUSH_URL = os.getenv("PROMETHEUS_PUSH_URL", "")

app = FastAPI(title="Project Planner AI")

# Any origin, credentials allowed (the origin is echoed back).
app.add_middleware(
    CORSMiddleware,
    allow_origin_regex=".*",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(ops.router)
app.include_router(projects.router)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"Invalid request to {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=422, content={"error": "Invalid request body"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


def _start_carbon_tracker() -> None:
    try:
        state.tracker = EmissionsTracker(
            project_name=ops.PROJECT_NAME,
            save_to_prometheus=bool(PROMETHEUS_PUSH_URL),
            prometheus_url=PROMETHEUS_PUSH_URL or "http://localhost:9091",
            log_level="error",
        )
        state.tracker.start()
        logger.info("CodeCarbon tracker started")
    except Exception as e:
        state.tracker = None
        logger.warning(f"CodeCarbon tracker not started: {e}")


async def _init_storage() -> None:
    """
    Open the pool and bootstrap the schema. A database that is down at boot
    leaves the store unset: the service still starts and /health reports it.
    """
    pool = None
    try:
        pool = await db.init_db_pool()
        if DB_INIT_SCHEMA:
            await db.init_schema(pool)
    except Exception as e:
        logger.error(f"Database unavailable at startup, storage endpoints disabled: {e}")
        if pool is not None:
            await db.close_db_pool(pool)
        state.db_pool = None
        state.project_store = None
        return

    state.db_pool = pool
    state.project_store = ProjectStore(pool)


@app.on_event("startup")
async def startup() -> None:
    if CARBON_TRACKING:
        _start_carbon_tracker()

    provider = build_provider()
    state.llm_client = LLMClient(provider=provider)
    if provider is None:
        logger.warning("No LLM provider configured, /generate is disabled")
    else:
        logger.info(f"LLM provider: {type(provider).__name__}")

    await _init_storage()


@app.on_event("shutdown")
async def shutdown() -> None:
    await db.close_db_pool(state.db_pool)
    state.db_pool = None
    state.project_store = None

    if state.tracker is not None:
        try:
            state.tracker.stop()
            logger.info("CodeCarbon tracker stopped")
        except Exception as e:
            logger.error(f"Error stopping CodeCarbon tracker: {e}")
        state.tracker = None


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=PORT)

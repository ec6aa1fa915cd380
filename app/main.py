import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from redis import Redis
from sqlalchemy import text
from sqlalchemy.engine import Engine
from starlette.concurrency import run_in_threadpool

from app.api.v1.api import api_router
from app.api.webhooks import clerk
from app.core.cache import close_cache_client, create_cache_client
from app.core.config import Settings, get_settings
from app.core.database import create_db_engine, create_session_factory
from app.core.error_handlers import register_exception_handlers

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Configure audit logger (JSON lines)
    audit_logger = logging.getLogger("audit")
    if not audit_logger.handlers:
        handler = logging.StreamHandler()
        # Keep raw JSON line without extra prefixes
        handler.setFormatter(logging.Formatter("%(message)s"))
        audit_logger.addHandler(handler)
    audit_logger.setLevel(logging.INFO)
    # Do not propagate to root to avoid duplication
    audit_logger.propagate = False


def check_connections(engine: Engine, cache: Redis) -> None:
    with engine.connect() as connection:
        connection.execute(text("SELECT 1"))
    cache.ping()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the database engine and Redis client, check both, close both on exit."""
    settings: Settings = app.state.settings
    engine = create_db_engine(settings.DATABASE_URL)
    cache = create_cache_client(settings.REDIS_URL)
    try:
        try:
            await run_in_threadpool(check_connections, engine, cache)
        except Exception:
            logger.critical("Could not reach the database or Redis at startup", exc_info=True)
            raise
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine)
        app.state.cache = cache
        logger.info("Spendaro API started (%s)", settings.ENVIRONMENT)
        yield
    finally:
        close_cache_client(cache)
        engine.dispose()
        logger.info("Connections closed")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Spendaro API",
        description="Budgets, categories, items and transactions for personal finance.",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # GZip compression for large JSON responses
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Set up CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(api_router, prefix=f"/api/{settings.API_VERSION}")
    app.include_router(clerk.router, prefix="/api/webhooks")

    @app.get("/healthz")
    async def health_check():
        return {"status": "OK"}

    return app


app = create_app()

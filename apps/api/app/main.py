"""FastAPI application serving cross-reference queries."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from xrefs_core.database import close_engine, create_schema, get_engine
from xrefs_core.settings import get_settings
from xrefs_core.storage import get_graph_store
from xrefs_core.telemetry import init_telemetry, shutdown_telemetry

from app.routes import health, xrefs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler."""
    # Startup
    init_telemetry(service_suffix="-api")
    if get_settings().xrefs_store == "sql":
        await create_schema(get_engine())
        logger.info("Graph schema ready")
    yield
    # Shutdown
    await get_graph_store().close()
    await shutdown_telemetry()
    await close_engine()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="xrefs API",
        description="Cross-reference queries over a fact/edge graph",
        version="0.1.0",
        lifespan=lifespan,
    )

    # CORS middleware - permissive for dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://localhost:8000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix="/api")
    app.include_router(xrefs.router, prefix="/api")

    return app


app = create_app()


def run() -> None:
    """Serve the API with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level="debug" if settings.debug else "info",
    )

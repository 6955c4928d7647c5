"""FastAPI application entry point."""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, FastAPI

from shopchat import __version__
from shopchat.api.chat import router as chat_router
from shopchat.api.exceptions import register_exception_handlers
from shopchat.api.tools import router as tools_router
from shopchat.catalog.deps import build_catalog_store
from shopchat.configs.config import get_app_config
from shopchat.core.metrics import setup_metrics
from shopchat.infra.http_client import build_http_client
from shopchat.infra.lifespan import inject
from shopchat.infra.logging import setup_logging
from shopchat.infra.telemetry import init_telemetry

logger = logging.getLogger(__name__)


@inject
async def lifespan(
    app: FastAPI,
    _http: Annotated[None, Depends(build_http_client)],
    _catalog: Annotated[None, Depends(build_catalog_store)],
) -> AsyncGenerator[None, None]:
    """Shared resources are built by the ``build_*`` dependencies above
    and torn down in reverse order on shutdown."""
    logger.info("Shopchat application started")
    yield
    logger.info("Shutting down Shopchat application")


def get_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    config = get_app_config()
    setup_logging(config.logging)

    app = FastAPI(
        title="Shopchat",
        description="Conversational front-end for a product catalog",
        version=__version__,
        lifespan=lifespan,
    )

    # Anything that adds middleware must run before the app starts.
    setup_metrics(app, config)
    init_telemetry(app, config.tracing)
    register_exception_handlers(app)

    app.include_router(chat_router)
    app.include_router(tools_router)

    return app


app = get_app()

"""Catalog store lifespan dependency.

``build_catalog_store`` loads the seed file once at startup and keeps
the store on ``app.state``; ``get_catalog_store`` reads it per request.
"""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from shopchat.configs.config import PROJECT_ROOT, AppConfig, get_app_config
from shopchat.infra.lifespan import get_app

from .store import CatalogStore, InMemoryCatalogStore


async def build_catalog_store(
    app: Annotated[FastAPI, Depends(get_app)],
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> AsyncGenerator[None, None]:
    """Load the catalog seed file and attach the store to ``app.state``."""
    path = config.catalog.seed_file
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    app.state.catalog_store = InMemoryCatalogStore.from_file(path)
    yield


def get_catalog_store(request: Request) -> CatalogStore:
    """FastAPI dependency — reads from ``app.state``."""
    return request.app.state.catalog_store

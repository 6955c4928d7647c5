"""FastAPI dependency factory for the catalog tool backend."""

from typing import Annotated

from fastapi import Depends, Request

from shopchat.configs.config import get_tools_config
from shopchat.configs.system import ToolsConfig

from .base import CatalogTools
from .local import LocalCatalogTools
from .remote import HttpCatalogTools


def get_catalog_tools(
    config: Annotated[ToolsConfig, Depends(get_tools_config)],
    request: Request,
) -> CatalogTools:
    """Pick the backend named by ``tools.backend``.

    Both backends are cheap wrappers around objects that live on
    ``app.state`` (the catalog store, the shared HTTP client).
    """
    state = request.app.state
    if config.backend == "http":
        return HttpCatalogTools(state.http_client, config)
    return LocalCatalogTools(state.catalog_store, search_limit=config.search_limit)

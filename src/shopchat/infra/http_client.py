"""Shared outbound ``httpx.AsyncClient``.

``build_http_client`` is a lifespan dependency: one connection pool for
the LLM service and the catalog tool endpoints, closed on shutdown.
Per-request timeouts are passed by the callers from their own config.
"""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

import httpx
from fastapi import Depends, FastAPI, Request

from shopchat.infra.lifespan import get_app

logger = logging.getLogger(__name__)


async def build_http_client(
    app: Annotated[FastAPI, Depends(get_app)],
) -> AsyncGenerator[None, None]:
    """Create the shared client, attach to ``app.state``; close on shutdown."""
    client = httpx.AsyncClient(headers={"Content-Type": "application/json"})
    app.state.http_client = client
    logger.info("Shared HTTP client created")

    yield

    await client.aclose()
    logger.info("Shared HTTP client closed")


def get_http_client(request: Request) -> httpx.AsyncClient:
    """FastAPI dependency — reads from ``app.state``."""
    return request.app.state.http_client

"""Catalog tools reached over HTTP.

Talks to the ``getData`` / ``compare`` endpoints (served by
``shopchat.api.tools`` or any service with the same contract) and maps
their JSON into ``ToolOutcome``s.  No retries.
"""

import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from shopchat.configs.system import ToolsConfig
from shopchat.core.errors import ToolCallError
from shopchat.core.models import (
    Candidates,
    Comparison,
    Found,
    FoundPair,
    NotFound,
    Product,
    ToolError,
    ToolOutcome,
)

from .base import TOOL_COMPARE, TOOL_LOOKUP, CatalogTools

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Response shapes
# ---------------------------------------------------------------------------


class LookupResult(BaseModel):
    ok: bool = False
    product: Product | None = None
    results: list[Product] | None = None
    error: str | None = None


class CompareResult(BaseModel):
    ok: bool = False
    a: Product | None = None
    b: Product | None = None
    comparison: Comparison | None = None
    error: str | None = None


class HttpCatalogTools(CatalogTools):
    """Call the tool endpoints with the shared HTTP client."""

    backend_name = "http"

    def __init__(self, client: httpx.AsyncClient, config: ToolsConfig) -> None:
        self._client = client
        self._config = config

    async def _post(self, tool: str, path: str, payload: dict[str, Any]) -> httpx.Response:
        url = f"{self._config.base_url.rstrip('/')}{path}"
        try:
            return await self._client.post(
                url, json=payload, timeout=self._config.timeout.total_seconds()
            )
        except httpx.HTTPError as exc:
            raise ToolCallError(tool, f"request to {url} failed: {exc}") from exc

    @staticmethod
    def _decode(tool: str, response: httpx.Response, model: type[BaseModel]) -> Any:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise ToolCallError(
                tool, f"unreadable response (HTTP {response.status_code})"
            ) from exc

    async def _lookup(self, query: str) -> ToolOutcome:
        try:
            response = await self._post(
                TOOL_LOOKUP, self._config.lookup_path, {"query": query}
            )
            result: LookupResult = self._decode(TOOL_LOOKUP, response, LookupResult)
        except ToolCallError as exc:
            logger.warning("%s", exc)
            return ToolError(message=exc.detail)

        if not result.ok:
            logger.warning(
                "%s tool returned HTTP %d: %s",
                TOOL_LOOKUP,
                response.status_code,
                result.error,
            )
            return ToolError(message=result.error or f"HTTP {response.status_code}")
        if result.product is not None:
            return Found(record=result.product)
        if result.results:
            return Candidates(results=result.results)
        return NotFound()

    async def _compare(self, left: str, right: str) -> ToolOutcome:
        try:
            response = await self._post(
                TOOL_COMPARE,
                self._config.compare_path,
                {"aName": left, "bName": right},
            )
            if response.status_code == httpx.codes.NOT_FOUND:
                return NotFound()
            result: CompareResult = self._decode(TOOL_COMPARE, response, CompareResult)
        except ToolCallError as exc:
            logger.warning("%s", exc)
            return ToolError(message=exc.detail)

        if not result.ok:
            logger.warning(
                "%s tool returned HTTP %d: %s",
                TOOL_COMPARE,
                response.status_code,
                result.error,
            )
            return ToolError(message=result.error or f"HTTP {response.status_code}")
        if result.a is None or result.b is None or result.comparison is None:
            return NotFound()

        return FoundPair(
            a=result.a,
            b=result.b,
            diffs=result.comparison.diffs,
            recommendation=result.comparison.recommendation,
        )

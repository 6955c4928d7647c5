"""Catalog tool invoker interface.

Subclasses implement ``_lookup`` / ``_compare`` for one backend; the
public ``invoke_*`` wrappers add tracing and metrics and guarantee that
callers only ever see a ``ToolOutcome``, never an exception.
"""

import logging
from abc import ABC, abstractmethod

from shopchat.core.metrics import TOOL_CALLS_TOTAL
from shopchat.core.models import ToolError, ToolOutcome
from shopchat.infra.telemetry import (
    ATTR_TOOL_BACKEND,
    ATTR_TOOL_OUTCOME,
    SPAN_TOOL_COMPARE,
    SPAN_TOOL_LOOKUP,
    tracer,
)

logger = logging.getLogger(__name__)

TOOL_LOOKUP = "getData"
TOOL_COMPARE = "compare"


class CatalogTools(ABC):
    """Read-only product lookup and comparison."""

    backend_name: str = ""

    @abstractmethod
    async def _lookup(self, query: str) -> ToolOutcome:
        """Look up an already cleaned, meaningful query."""

    @abstractmethod
    async def _compare(self, left: str, right: str) -> ToolOutcome:
        """Resolve both names and compare them."""

    async def invoke_lookup(self, query: str) -> ToolOutcome:
        return await self._invoke(TOOL_LOOKUP, SPAN_TOOL_LOOKUP, self._lookup, query)

    async def invoke_compare(self, left: str, right: str) -> ToolOutcome:
        return await self._invoke(
            TOOL_COMPARE, SPAN_TOOL_COMPARE, self._compare, left, right
        )

    async def _invoke(self, tool, span_name, call, *args) -> ToolOutcome:
        with tracer.start_as_current_span(span_name) as span:
            span.set_attribute(ATTR_TOOL_BACKEND, self.backend_name)
            try:
                outcome = await call(*args)
            except Exception as exc:
                logger.exception("%s tool failed", tool)
                outcome = ToolError(message=str(exc) or type(exc).__name__)
            span.set_attribute(ATTR_TOOL_OUTCOME, outcome.name)

        TOOL_CALLS_TOTAL.labels(tool_name=tool, outcome=outcome.name).inc()
        return outcome

"""In-process catalog tools backed by a ``CatalogStore``."""

import asyncio
import logging

from shopchat.catalog.store import CatalogStore
from shopchat.core.metrics import LOOKUP_STAGE_FAILURES_TOTAL
from shopchat.core.models import (
    Candidates,
    Found,
    FoundPair,
    NotFound,
    ToolError,
    ToolOutcome,
)
from shopchat.core.scoring import compare_products

from .base import CatalogTools

logger = logging.getLogger(__name__)

MIN_TOKEN_LENGTH = 2


def search_tokens(query: str) -> list[str]:
    """Whitespace tokens long enough to be worth matching on."""
    return [t for t in query.split() if len(t) >= MIN_TOKEN_LENGTH]


async def staged_lookup(
    store: CatalogStore, query: str, limit: int
) -> ToolOutcome:
    """Look *query* up in three progressively broader stages.

    1. first product whose name contains the whole query;
    2. products whose name contains every token;
    3. products whose name or description contains the query.

    A later stage runs only when the earlier ones found nothing.  Failures
    in stages 1 and 2 are logged and skipped; a failure in stage 3 is the
    outcome.
    """
    try:
        product = await store.find_by_name(query)
        if product is not None:
            return Found(record=product)
    except Exception:
        LOOKUP_STAGE_FAILURES_TOTAL.labels(stage="name").inc()
        logger.warning("Lookup stage 'name' failed for %r", query, exc_info=True)

    tokens = search_tokens(query)
    if tokens:
        try:
            rows = await store.search_name_tokens(tokens, limit)
            if len(rows) == 1:
                return Found(record=rows[0])
            if rows:
                return Candidates(results=rows)
        except Exception:
            LOOKUP_STAGE_FAILURES_TOTAL.labels(stage="tokens").inc()
            logger.warning(
                "Lookup stage 'tokens' failed for %r", query, exc_info=True
            )

    try:
        rows = await store.search(query, limit)
    except Exception as exc:
        logger.error("Lookup stage 'search' failed for %r: %s", query, exc)
        return ToolError(message=str(exc) or type(exc).__name__)

    return Candidates(results=rows) if rows else NotFound()


class LocalCatalogTools(CatalogTools):
    """Query the catalog store directly, no HTTP hop."""

    backend_name = "local"

    def __init__(self, store: CatalogStore, search_limit: int = 10) -> None:
        self._store = store
        self._search_limit = search_limit

    async def _lookup(self, query: str) -> ToolOutcome:
        return await staged_lookup(self._store, query, self._search_limit)

    async def _compare(self, left: str, right: str) -> ToolOutcome:
        a, b = await asyncio.gather(
            self._store.get_by_name(left), self._store.get_by_name(right)
        )
        if a is None or b is None:
            return NotFound()

        comparison = compare_products(a, b)
        return FoundPair(
            a=a,
            b=b,
            diffs=comparison.diffs,
            recommendation=comparison.recommendation,
        )

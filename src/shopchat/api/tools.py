"""Catalog tool endpoints: ``getData`` and ``compare``.

These are the HTTP face of the catalog store.  ``HttpCatalogTools``
calls them when ``tools.backend`` is ``http``; the local backend runs the
same lookup in-process.
"""

import asyncio
import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shopchat.core.models import Candidates, Found, ToolError
from shopchat.core.normalizer import clean_product_phrase, is_meaningful
from shopchat.core.scoring import compare_products
from shopchat.core.tools.local import staged_lookup

from .deps import CatalogStoreDep, ToolsConfigDep
from .models import CompareRequest, CompareResponse, LookupRequest, LookupResponse

logger = logging.getLogger(__name__)

TOOL_PREFIX = "/api/tool"

router = APIRouter(prefix=TOOL_PREFIX, tags=["tools"])

ERROR_LOOKUP_ARGS = "Provide query or id"
ERROR_COMPARE_ARGS = "Provide either aId & bId or aName & bName"
ERROR_NOT_FOUND = "Products not found"


def _json(model: BaseModel, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=model.model_dump(mode="json", exclude_none=True),
    )


@router.post("/getData")
async def get_data(
    body: LookupRequest,
    store: CatalogStoreDep,
    config: ToolsConfigDep,
) -> JSONResponse:
    """Look a product up by id, or search by free-text query.

    ``{ok, product}`` for a single match, ``{ok, results}`` otherwise
    (possibly empty); 400 without a query or id, 500 on store failure.
    """
    if body.id:
        try:
            product = await store.get_by_id(body.id)
        except Exception as exc:
            logger.exception("getData by id %r failed", body.id)
            return _json(LookupResponse(ok=False, error=str(exc)), 500)
        return _json(LookupResponse(ok=True, product=product))

    if not body.query:
        return _json(LookupResponse(ok=False, error=ERROR_LOOKUP_ARGS), 400)

    query = clean_product_phrase(body.query)
    if not is_meaningful(query):
        return _json(LookupResponse(ok=True, results=[]))

    outcome = await staged_lookup(store, query, config.search_limit)
    if isinstance(outcome, ToolError):
        return _json(LookupResponse(ok=False, error=outcome.message), 500)
    if isinstance(outcome, Found):
        return _json(LookupResponse(ok=True, product=outcome.record))
    if isinstance(outcome, Candidates):
        return _json(LookupResponse(ok=True, results=outcome.results))
    return _json(LookupResponse(ok=True, results=[]))


@router.post("/compare")
async def compare(body: CompareRequest, store: CatalogStoreDep) -> JSONResponse:
    """Fetch two products and compare them.

    Ids win when both pairs are given.  404 when either product is
    missing.
    """
    if body.has_ids:
        lookups = (store.get_by_id(body.a_id), store.get_by_id(body.b_id))
    elif body.has_names:
        lookups = (store.get_by_name(body.a_name), store.get_by_name(body.b_name))
    else:
        return _json(CompareResponse(ok=False, error=ERROR_COMPARE_ARGS), 400)

    try:
        a, b = await asyncio.gather(*lookups)
    except Exception as exc:
        logger.exception("compare lookup failed")
        return _json(CompareResponse(ok=False, error=str(exc)), 500)

    if a is None or b is None:
        return _json(CompareResponse(ok=False, error=ERROR_NOT_FOUND), 404)

    return _json(
        CompareResponse(ok=True, a=a, b=b, comparison=compare_products(a, b))
    )

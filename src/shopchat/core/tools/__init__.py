"""Catalog tool invokers (lookup and compare)."""

from .base import TOOL_COMPARE, TOOL_LOOKUP, CatalogTools  # noqa: F401
from .deps import get_catalog_tools  # noqa: F401
from .local import LocalCatalogTools, staged_lookup  # noqa: F401
from .remote import HttpCatalogTools  # noqa: F401

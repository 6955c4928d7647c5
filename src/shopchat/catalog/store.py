"""Read-only product catalog.

``CatalogStore`` is the query surface the lookup/compare tools need.
Matching is case-insensitive substring matching on the name (and the
description for the broad search).  ``InMemoryCatalogStore`` serves a
YAML seed file; a database-backed store only has to implement the same
five coroutines.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable

import yaml

from shopchat.core.models import Product

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


class CatalogStore(ABC):
    """Interface for catalog backends."""

    @abstractmethod
    async def get_by_id(self, product_id: int | str) -> Product | None:
        """Return the product with this id, or ``None``."""

    @abstractmethod
    async def get_by_name(self, name: str) -> Product | None:
        """Return the first product whose name equals *name*, ignoring case."""

    @abstractmethod
    async def find_by_name(self, fragment: str) -> Product | None:
        """Return the first product whose name contains *fragment*."""

    @abstractmethod
    async def search_name_tokens(
        self, tokens: Iterable[str], limit: int
    ) -> list[Product]:
        """Products whose name contains every token."""

    @abstractmethod
    async def search(self, fragment: str, limit: int) -> list[Product]:
        """Products whose name or description contains *fragment*."""


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


class InMemoryCatalogStore(CatalogStore):
    """Catalog held in a list, in seed-file order."""

    def __init__(self, products: Iterable[Product]) -> None:
        self._products = list(products)

    def __len__(self) -> int:
        return len(self._products)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> InMemoryCatalogStore:
        return cls(Product.model_validate(r) for r in records)

    @classmethod
    def from_file(cls, path: Path) -> InMemoryCatalogStore:
        """Load a YAML file with a top-level ``products`` list."""
        if not path.exists():
            raise FileNotFoundError(f"Catalog seed file not found: {path}")

        with open(path, encoding=DEFAULT_ENCODING) as f:
            data = yaml.safe_load(f) or {}

        store = cls.from_records(data.get("products", []))
        logger.info("Loaded %d products from %s", len(store), path)
        return store

    async def get_by_id(self, product_id: int | str) -> Product | None:
        wanted = str(product_id)
        return next((p for p in self._products if str(p.id) == wanted), None)

    async def get_by_name(self, name: str) -> Product | None:
        wanted = name.strip().lower()
        return next(
            (p for p in self._products if (p.name or "").lower() == wanted), None
        )

    async def find_by_name(self, fragment: str) -> Product | None:
        return next((p for p in self._products if _contains(p.name, fragment)), None)

    async def search_name_tokens(
        self, tokens: Iterable[str], limit: int
    ) -> list[Product]:
        tokens = list(tokens)
        matches = [
            p for p in self._products if all(_contains(p.name, t) for t in tokens)
        ]
        return matches[:limit]

    async def search(self, fragment: str, limit: int) -> list[Product]:
        matches = [
            p
            for p in self._products
            if _contains(p.name, fragment) or _contains(p.description, fragment)
        ]
        return matches[:limit]

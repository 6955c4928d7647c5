from .store import CatalogStore, InMemoryCatalogStore  # noqa: F401

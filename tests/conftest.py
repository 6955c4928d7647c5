"""Shared fixtures: a small catalog and the default config sections."""

import pytest

from shopchat.catalog.store import InMemoryCatalogStore
from shopchat.configs.system import ChatConfig, LLMConfig, PromptConfig, ToolsConfig
from shopchat.core.models import Product

PRODUCT_RECORDS = [
    {
        "id": 1,
        "name": "Samsung Galaxy S21",
        "price": 699,
        "battery_hours": 20,
        "ram_gb": 8,
        "storage_gb": 128,
        "rating": 4.4,
        "description": "AMOLED phone with a triple camera",
        "category": "electronics",
    },
    {
        "id": 2,
        "name": "Samsung Galaxy S22",
        "price": 799,
        "battery_hours": 22,
        "ram_gb": 8,
        "storage_gb": 256,
        "rating": 4.5,
        "description": "Compact flagship",
        "category": "electronics",
    },
    {
        "id": 3,
        "name": "Google Pixel 8",
        "price": 699,
        "battery_hours": 24,
        "ram_gb": 8,
        "storage_gb": 128,
        "rating": 4.5,
        "description": "Tensor phone with long updates",
        "category": "electronics",
    },
    {
        "id": 4,
        "name": "Classic Leather Boots",
        "price": 149,
        "rating": 4.1,
        "description": "Waterproof ankle boots",
        "category": "shoes",
    },
]


@pytest.fixture
def products() -> list[Product]:
    return [Product.model_validate(r) for r in PRODUCT_RECORDS]


@pytest.fixture
def store() -> InMemoryCatalogStore:
    return InMemoryCatalogStore.from_records(PRODUCT_RECORDS)


@pytest.fixture
def prompts() -> PromptConfig:
    return PromptConfig()


@pytest.fixture
def chat_config() -> ChatConfig:
    return ChatConfig()


@pytest.fixture
def llm_config() -> LLMConfig:
    return LLMConfig(
        endpoint="https://llm.test/v1", api_key="test-key", model_name="test-model"
    )


@pytest.fixture
def tools_config() -> ToolsConfig:
    return ToolsConfig(backend="http", base_url="http://tools.test")

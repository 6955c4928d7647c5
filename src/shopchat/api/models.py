"""Pydantic models for the chat and catalog tool APIs."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from shopchat.core.models import Comparison, Product


class ChatRequest(BaseModel):
    """Request model for the chat endpoint.

    Both fields are deliberately loose: the pipeline turns a missing
    message into ``"message required"`` and drops unusable history
    instead of rejecting the whole request.
    """

    model_config = ConfigDict(extra="ignore")

    message: Any = Field(default=None, description="The shopper's message")
    messages: Any = Field(
        default=None,
        description="Prior conversation turns as [{role, content}]",
    )


# ---------------------------------------------------------------------------
# Catalog tools
# ---------------------------------------------------------------------------


class LookupRequest(BaseModel):
    """``getData`` request: a free-text query or a product id."""

    model_config = ConfigDict(extra="ignore")

    query: str | None = None
    id: int | str | None = None


class LookupResponse(BaseModel):
    ok: bool
    product: Product | None = None
    results: list[Product] | None = None
    error: str | None = None


class CompareRequest(BaseModel):
    """``compare`` request: two ids or two names."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    a_id: int | str | None = Field(default=None, alias="aId")
    b_id: int | str | None = Field(default=None, alias="bId")
    a_name: str | None = Field(default=None, alias="aName")
    b_name: str | None = Field(default=None, alias="bName")

    @property
    def has_ids(self) -> bool:
        return bool(self.a_id) and bool(self.b_id)

    @property
    def has_names(self) -> bool:
        return bool(self.a_name) and bool(self.b_name)


class CompareResponse(BaseModel):
    ok: bool
    a: Product | None = None
    b: Product | None = None
    comparison: Comparison | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    status: str = "ok"

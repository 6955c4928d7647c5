"""Domain models for the chat pipeline.

Every request builds fresh instances of these; nothing here is mutated
after construction.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

ROLE_SYSTEM = "system"
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"

Role = Literal["system", "user", "assistant"]

# int first so whole numbers render as "799", not "799.0"
Number = Union[int, float]


class Message(BaseModel):
    """One role-tagged message, in the order it is sent to the model."""

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    @classmethod
    def system(cls, content: str) -> "Message":
        return cls(role=ROLE_SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> "Message":
        return cls(role=ROLE_USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "Message":
        return cls(role=ROLE_ASSISTANT, content=content)


class Product(BaseModel):
    """Catalog record.

    Every field is optional and unknown columns are kept, so records
    coming back from a remote tool round-trip unchanged into the prompt.
    """

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    name: str | None = None
    price: Number | None = None
    battery_hours: Number | None = None
    ram_gb: Number | None = None
    storage_gb: Number | None = None
    rating: Number | None = None
    description: str | None = None
    category: str | None = None

    def to_record(self) -> dict[str, Any]:
        """Plain dict without unset fields, for JSON prompts and responses."""
        return self.model_dump(exclude_none=True)


class Comparison(BaseModel):
    diffs: list[str] = Field(default_factory=list)
    recommendation: str


# ---------------------------------------------------------------------------
# Intents
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Greeting:
    name = "greeting"


@dataclass(frozen=True)
class Compare:
    left: str
    right: str
    name = "compare"


@dataclass(frozen=True)
class ProductQuery:
    query: str
    name = "product_query"


@dataclass(frozen=True)
class Fallback:
    name = "fallback"


Intent = Union[Greeting, Compare, ProductQuery, Fallback]


# ---------------------------------------------------------------------------
# Tool outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Found:
    record: Product
    name = "found"


@dataclass(frozen=True)
class FoundPair:
    a: Product
    b: Product
    diffs: list[str] = field(default_factory=list)
    recommendation: str = ""
    name = "found_pair"


@dataclass(frozen=True)
class Candidates:
    results: list[Product] = field(default_factory=list)
    name = "candidates"


@dataclass(frozen=True)
class NotFound:
    name = "not_found"


@dataclass(frozen=True)
class ToolError:
    message: str
    name = "tool_error"


ToolOutcome = Union[Found, FoundPair, Candidates, NotFound, ToolError]


# ---------------------------------------------------------------------------
# Response envelope
# ---------------------------------------------------------------------------


class ChatResponseEnvelope(BaseModel):
    """What the chat endpoint returns for every request."""

    ok: bool
    reply: str | None = None
    error: str | None = None
    assistant_message: Message | None = Field(
        default=None, serialization_alias="assistantMessage"
    )

    @classmethod
    def success(cls, reply: str) -> "ChatResponseEnvelope":
        return cls(ok=True, reply=reply, assistant_message=Message.assistant(reply))

    @classmethod
    def failure(cls, error: str) -> "ChatResponseEnvelope":
        return cls(ok=False, error=error)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)

from datetime import timedelta
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Hosted OpenAI-compatible completion service settings."""

    endpoint: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/openai",
        description="Base URL; ``/chat/completions`` is appended",
    )
    api_key: str = Field(
        default="",
        description="Bearer token for the completion service",
    )
    model_name: str = Field(
        default="gemini-2.5-flash", description="Target model name"
    )
    temperature: float = Field(
        default=0.0,
        description="Sampling temperature for factual (tool-backed) replies",
    )
    max_tokens: int = Field(
        default=1024, description="Output-token ceiling per completion"
    )
    model_timeout: timedelta = Field(
        default=timedelta(seconds=60),
        description="Timeout for a single completion request",
    )


class ChatConfig(BaseModel):
    """Configuration for chat settings."""

    max_history: int = Field(
        default=12,
        ge=0,
        description="Maximum prior non-system turns forwarded to the model",
    )
    conversational_temperature: float = Field(
        default=0.7,
        description="Sampling temperature for small-talk replies",
    )
    max_candidates: int = Field(
        default=3,
        ge=1,
        description="Candidates listed when a lookup is ambiguous",
    )


class ToolsConfig(BaseModel):
    """How the chat pipeline reaches the catalog tools."""

    backend: Literal["local", "http"] = Field(
        default="local",
        description="'local' queries the catalog in-process, "
        "'http' calls the tool endpoints",
    )
    base_url: str = Field(
        default="http://localhost:8000",
        description="Internal base URL of the tool endpoints",
    )
    lookup_path: str = Field(default="/api/tool/getData")
    compare_path: str = Field(default="/api/tool/compare")
    timeout: timedelta = Field(
        default=timedelta(seconds=15), description="Tool HTTP request timeout"
    )
    search_limit: int = Field(
        default=10, ge=1, description="Row cap for multi-row catalog searches"
    )


class CatalogConfig(BaseModel):
    """Read-only product catalog."""

    seed_file: Path = Field(
        default=Path("configs/catalog.yaml"),
        description="YAML file with a top-level ``products`` list",
    )


class PromptConfig(BaseModel):
    """Canned replies and system prompts."""

    greeting_reply: str = Field(
        default=(
            "Hi! I'm your product assistant — ask about any product "
            "or say 'Compare Phone A and Phone B'."
        )
    )
    compare_system_prompt: str = Field(
        default=(
            "You are a helpful shopping assistant. Use TOOL_RESULT as "
            "factual and produce a concise comparison."
        )
    )
    product_system_prompt: str = Field(
        default=(
            "You are a helpful shopping assistant. Use TOOL output as "
            "factual. Keep answer concise."
        )
    )
    fallback_system_prompt: str = Field(
        default="You are a friendly shopping assistant."
    )
    fallback_reply: str = Field(default="I can help with product info.")
    no_match_reply: str = Field(default="No matching product found.")
    candidates_header: str = Field(default="I found these products:")


class LoggingConfig(BaseModel):
    """Root logger settings."""

    level: str = Field(default="INFO", description="Root log level")
    json_output: bool = Field(
        default=True,
        description="Emit JSON lines; set false for coloured dev output",
    )


class TracingConfig(BaseModel):
    """OpenTelemetry tracing settings."""

    enabled: bool = Field(default=False, description="Export OTLP traces")
    endpoint: str = Field(
        default="", description="OTLP HTTP traces endpoint, e.g. .../v1/traces"
    )
    service_name: str = Field(default="shopchat")
    sample_rate: float = Field(default=1.0, ge=0.0, le=1.0)
    excluded_urls: list[str] = Field(
        default_factory=lambda: ["/health", "/metrics"],
        description="Paths skipped by HTTP instrumentation",
    )

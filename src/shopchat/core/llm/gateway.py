"""Gateway to a hosted OpenAI-compatible chat-completion service.

``complete`` raises only for configuration, transport and HTTP-status
problems.  Reading text out of a successful response never raises: an
unexpected shape yields the caller's fallback string instead.
"""

import logging
import time
from typing import Any, Sequence

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from shopchat.configs.system import LLMConfig
from shopchat.core.errors import ConfigurationError, TransportError
from shopchat.core.metrics import LLM_CALLS_TOTAL, LLM_LATENCY_SECONDS
from shopchat.core.models import Message
from shopchat.infra.telemetry import (
    ATTR_LLM_MESSAGE_COUNT,
    ATTR_LLM_MODEL,
    ATTR_LLM_STATUS,
    SPAN_LLM_COMPLETE,
    tracer,
)

logger = logging.getLogger(__name__)

COMPLETIONS_PATH = "/chat/completions"

# Upstream error bodies can be whole HTML pages.
_MAX_LOGGED_BODY = 2000


# ---------------------------------------------------------------------------
# Response decoding
# ---------------------------------------------------------------------------


class _ChoiceMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    content: Any = None


class _Choice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: _ChoiceMessage | None = None
    text: Any = None

    @field_validator("message", mode="before")
    @classmethod
    def _drop_non_object(cls, value: Any) -> Any:
        return value if isinstance(value, dict) else None


class CompletionResponse(BaseModel):
    """The subset of a chat-completion response the gateway reads.

    Only the first choice matters; later entries are never validated.
    """

    model_config = ConfigDict(extra="ignore")

    choices: list[Any] = []

    def first_choice(self) -> _Choice | None:
        if not self.choices or not isinstance(self.choices[0], dict):
            return None
        return _Choice.model_validate(self.choices[0])

    def first_text(self) -> str | None:
        """``choices[0].message.content``, else ``choices[0].text``."""
        choice = self.first_choice()
        if choice is None:
            return None
        if choice.message is not None and _is_text(choice.message.content):
            return choice.message.content
        if _is_text(choice.text):
            return choice.text
        return None


def _is_text(value: Any) -> bool:
    return isinstance(value, str) and value != ""


def decode_text(payload: Any) -> str | None:
    """Generated text from a decoded JSON payload, ``None`` if absent."""
    try:
        return CompletionResponse.model_validate(payload).first_text()
    except ValidationError:
        return None


# ---------------------------------------------------------------------------
# Gateway
# ---------------------------------------------------------------------------


class LLMGateway:
    """Send one context to the completion service and return its text."""

    def __init__(self, config: LLMConfig, client: httpx.AsyncClient) -> None:
        self._config = config
        self._client = client

    @property
    def url(self) -> str:
        return self._config.endpoint.rstrip("/") + COMPLETIONS_PATH

    def build_payload(
        self, messages: Sequence[Message], temperature: float
    ) -> dict[str, Any]:
        return {
            "model": self._config.model_name,
            "messages": [m.model_dump() for m in messages],
            "temperature": temperature,
            "max_tokens": self._config.max_tokens,
        }

    async def complete(
        self,
        messages: Sequence[Message],
        temperature: float,
        fallback: str,
    ) -> str:
        """Return the generated reply, or *fallback* if none can be read.

        Raises:
            ConfigurationError: no API key is configured.
            TransportError: the request failed or the service answered
                with a non-2xx status.
        """
        if not self._config.api_key:
            raise ConfigurationError("LLM API key is not configured")

        with tracer.start_as_current_span(SPAN_LLM_COMPLETE) as span:
            span.set_attribute(ATTR_LLM_MODEL, self._config.model_name)
            span.set_attribute(ATTR_LLM_MESSAGE_COUNT, len(messages))

            start = time.monotonic()
            try:
                response = await self._client.post(
                    self.url,
                    json=self.build_payload(messages, temperature),
                    headers={"Authorization": f"Bearer {self._config.api_key}"},
                    timeout=self._config.model_timeout.total_seconds(),
                )
            except httpx.HTTPError as exc:
                LLM_CALLS_TOTAL.labels(status="error").inc()
                logger.error("LLM request to %s failed: %s", self.url, exc)
                raise TransportError(0, str(exc)) from exc
            finally:
                LLM_LATENCY_SECONDS.observe(time.monotonic() - start)

            span.set_attribute(ATTR_LLM_STATUS, response.status_code)

        if not response.is_success:
            LLM_CALLS_TOTAL.labels(status="error").inc()
            body = response.text[:_MAX_LOGGED_BODY]
            logger.error("LLM service returned %d: %s", response.status_code, body)
            raise TransportError(response.status_code, body)

        try:
            payload = response.json()
        except ValueError:
            logger.warning("LLM response body is not JSON")
            payload = None

        text = decode_text(payload)
        if text is None:
            LLM_CALLS_TOTAL.labels(status="fallback").inc()
            logger.warning("Completion response carried no text; using fallback")
            return fallback

        LLM_CALLS_TOTAL.labels(status="ok").inc()
        return text

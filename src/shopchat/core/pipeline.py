"""Chat orchestration: intent → tool → context → LLM → envelope.

``ChatPipeline.respond`` is the single entry point.  It never raises:
every failure becomes an ``ok: false`` envelope.
"""

import logging
import time
from typing import Any, Awaitable, Callable

from shopchat.configs.system import ChatConfig, LLMConfig, PromptConfig
from shopchat.infra.logging import log_intent
from shopchat.infra.telemetry import (
    ATTR_CHAT_HISTORY_LEN,
    ATTR_CHAT_INTENT,
    SPAN_CHAT_PIPELINE,
    tracer,
)

from .context import build_context, coerce_history
from .errors import ConfigurationError, InputValidationError, TransportError
from .formatter import (
    candidates_reply,
    compare_tool_message,
    compare_user_message,
    price_line,
    product_tool_message,
    product_user_message,
)
from .intents import classify
from .llm.gateway import LLMGateway
from .metrics import CHAT_DURATION_SECONDS, CHAT_REQUESTS_TOTAL
from .models import (
    Candidates,
    ChatResponseEnvelope,
    Compare,
    Fallback,
    Found,
    FoundPair,
    Greeting,
    Message,
    NotFound,
    ProductQuery,
    ToolError,
)
from .normalizer import clean_product_phrase, is_meaningful
from .tools.base import TOOL_COMPARE, TOOL_LOOKUP, CatalogTools

logger = logging.getLogger(__name__)

ERROR_MESSAGE_REQUIRED = "message required"
ERROR_LLM_SERVICE = "LLM service error"
ERROR_UNKNOWN = "Error"

_Handler = Callable[[Any, str, list[Message] | None], Awaitable[ChatResponseEnvelope]]


def tool_error_text(tool: str) -> str:
    return f"{tool} tool error"


class ChatPipeline:
    """Answer one chat message, optionally with prior conversation turns."""

    def __init__(
        self,
        tools: CatalogTools,
        llm: LLMGateway,
        llm_config: LLMConfig,
        chat_config: ChatConfig,
        prompts: PromptConfig,
    ) -> None:
        self._tools = tools
        self._llm = llm
        self._factual_temperature = llm_config.temperature
        self._chat = chat_config
        self._prompts = prompts
        self._handlers: dict[type, _Handler] = {
            Greeting: self._on_greeting,
            Compare: self._on_compare,
            ProductQuery: self._on_product_query,
            Fallback: self._on_fallback,
        }

    async def respond(
        self, message: Any, raw_history: Any = None
    ) -> ChatResponseEnvelope:
        """Build the reply envelope for *message*.

        *raw_history* is whatever the caller sent as ``messages``; it is
        validated here and silently ignored when unusable.
        """
        start = time.monotonic()
        intent_name = "none"
        with tracer.start_as_current_span(SPAN_CHAT_PIPELINE) as span:
            try:
                text = message.strip() if isinstance(message, str) else ""
                if not text:
                    raise InputValidationError(ERROR_MESSAGE_REQUIRED)

                history = coerce_history(raw_history)
                intent = classify(text)
                intent_name = intent.name
                span.set_attribute(ATTR_CHAT_INTENT, intent_name)
                span.set_attribute(ATTR_CHAT_HISTORY_LEN, len(history or ()))

                with log_intent(intent_name):
                    envelope = await self._handlers[type(intent)](
                        intent, text, history
                    )
            except (InputValidationError, ConfigurationError) as exc:
                logger.warning("Chat request rejected: %s", exc)
                envelope = ChatResponseEnvelope.failure(str(exc))
            except TransportError as exc:
                logger.error(
                    "LLM call failed (status=%d): %s", exc.status_code, exc.body
                )
                envelope = ChatResponseEnvelope.failure(ERROR_LLM_SERVICE)
            except Exception as exc:
                logger.exception("Chat pipeline error")
                envelope = ChatResponseEnvelope.failure(str(exc) or ERROR_UNKNOWN)

        CHAT_REQUESTS_TOTAL.labels(
            intent=intent_name, status="ok" if envelope.ok else "error"
        ).inc()
        CHAT_DURATION_SECONDS.labels(intent=intent_name).observe(
            time.monotonic() - start
        )
        return envelope

    # ---- intent handlers -------------------------------------------------

    async def _on_greeting(
        self, intent: Greeting, text: str, history: list[Message] | None
    ) -> ChatResponseEnvelope:
        return ChatResponseEnvelope.success(self._prompts.greeting_reply)

    async def _on_compare(
        self, intent: Compare, text: str, history: list[Message] | None
    ) -> ChatResponseEnvelope:
        outcome = await self._tools.invoke_compare(intent.left, intent.right)
        if not isinstance(outcome, FoundPair):
            if isinstance(outcome, ToolError):
                logger.warning("Compare failed: %s", outcome.message)
            return ChatResponseEnvelope.failure(tool_error_text(TOOL_COMPARE))

        context = build_context(
            history,
            system_prompt=Message.system(self._prompts.compare_system_prompt),
            user_message=compare_user_message(intent.left, intent.right),
            tool_message=compare_tool_message(outcome),
            max_history=self._chat.max_history,
        )
        reply = await self._llm.complete(
            context, self._factual_temperature, fallback=outcome.recommendation
        )
        return ChatResponseEnvelope.success(reply)

    async def _on_product_query(
        self, intent: ProductQuery, text: str, history: list[Message] | None
    ) -> ChatResponseEnvelope:
        query = clean_product_phrase(intent.query)
        if is_meaningful(query):
            outcome = await self._tools.invoke_lookup(query)
        else:
            outcome = NotFound()

        if isinstance(outcome, ToolError):
            logger.warning("Lookup failed: %s", outcome.message)
            return ChatResponseEnvelope.failure(tool_error_text(TOOL_LOOKUP))

        if isinstance(outcome, Found):
            product = outcome.record
            context = build_context(
                history,
                system_prompt=Message.system(self._prompts.product_system_prompt),
                user_message=product_user_message(text),
                tool_message=product_tool_message(product),
                max_history=self._chat.max_history,
            )
            reply = await self._llm.complete(
                context, self._factual_temperature, fallback=price_line(product)
            )
            return ChatResponseEnvelope.success(reply)

        if isinstance(outcome, Candidates) and outcome.results:
            return ChatResponseEnvelope.success(
                candidates_reply(
                    self._prompts.candidates_header,
                    outcome.results,
                    self._chat.max_candidates,
                )
            )

        return ChatResponseEnvelope.success(self._prompts.no_match_reply)

    async def _on_fallback(
        self, intent: Fallback, text: str, history: list[Message] | None
    ) -> ChatResponseEnvelope:
        context = build_context(
            history,
            system_prompt=Message.system(self._prompts.fallback_system_prompt),
            user_message=Message.user(text),
            max_history=self._chat.max_history,
        )
        reply = await self._llm.complete(
            context,
            self._chat.conversational_temperature,
            fallback=self._prompts.fallback_reply,
        )
        return ChatResponseEnvelope.success(reply)

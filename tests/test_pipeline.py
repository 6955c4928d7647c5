"""Tests for the chat pipeline: intent dispatch and envelope mapping."""

from unittest.mock import AsyncMock

import pytest

from shopchat.core.errors import ConfigurationError, TransportError
from shopchat.core.llm import LLMGateway
from shopchat.core.models import (
    Candidates,
    Found,
    FoundPair,
    Message,
    NotFound,
    ToolError,
)
from shopchat.core.pipeline import ChatPipeline
from shopchat.core.tools import CatalogTools


@pytest.fixture
def tools() -> AsyncMock:
    return AsyncMock(spec=CatalogTools)


@pytest.fixture
def llm() -> AsyncMock:
    gateway = AsyncMock(spec=LLMGateway)
    gateway.complete.return_value = "LLM reply"
    return gateway


@pytest.fixture
def pipeline(tools, llm, llm_config, chat_config, prompts) -> ChatPipeline:
    return ChatPipeline(tools, llm, llm_config, chat_config, prompts)


def _sent_context(llm: AsyncMock) -> list[Message]:
    return llm.complete.await_args.args[0]


class TestValidation:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", ["", "   ", None, 42, ["hi"]])
    async def test_message_required(self, pipeline, tools, llm, message):
        envelope = await pipeline.respond(message)
        assert envelope.to_payload() == {"ok": False, "error": "message required"}
        tools.invoke_lookup.assert_not_called()
        llm.complete.assert_not_called()


class TestGreeting:
    @pytest.mark.asyncio
    async def test_canned_reply(self, pipeline, tools, llm, prompts):
        envelope = await pipeline.respond("hello")

        assert envelope.ok is True
        assert envelope.reply == prompts.greeting_reply
        assert envelope.to_payload()["assistantMessage"] == {
            "role": "assistant",
            "content": prompts.greeting_reply,
        }
        tools.invoke_lookup.assert_not_called()
        tools.invoke_compare.assert_not_called()
        llm.complete.assert_not_called()


class TestCompare:
    @pytest.mark.asyncio
    async def test_found_pair(self, pipeline, tools, llm, products, prompts):
        tools.invoke_compare.return_value = FoundPair(
            a=products[0],
            b=products[1],
            diffs=["Rating: 4.4 vs 4.5"],
            recommendation="Samsung Galaxy S22",
        )

        envelope = await pipeline.respond(
            "Compare Samsung Galaxy S21 and Samsung Galaxy S22"
        )

        assert envelope.reply == "LLM reply"
        tools.invoke_compare.assert_awaited_once_with(
            "Samsung Galaxy S21", "Samsung Galaxy S22"
        )
        context = _sent_context(llm)
        assert context[0] == Message.system(prompts.compare_system_prompt)
        assert context[-2].content.startswith("TOOL_RESULT:")
        assert context[-1] == Message.user(
            "User asked: Compare Samsung Galaxy S21 and Samsung Galaxy S22."
        )
        assert llm.complete.await_args.args[1] == 0.0
        assert llm.complete.await_args.kwargs["fallback"] == "Samsung Galaxy S22"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("outcome", [NotFound(), ToolError(message="down")])
    async def test_unresolved_pair(self, pipeline, tools, llm, outcome):
        tools.invoke_compare.return_value = outcome

        envelope = await pipeline.respond("compare Phone X and Phone Y")

        assert envelope.to_payload() == {"ok": False, "error": "compare tool error"}
        llm.complete.assert_not_called()


class TestProductQuery:
    @pytest.mark.asyncio
    async def test_found(self, pipeline, tools, llm, products, prompts):
        tools.invoke_lookup.return_value = Found(record=products[2])

        envelope = await pipeline.respond("What is the price of Google Pixel 8?")

        assert envelope.reply == "LLM reply"
        tools.invoke_lookup.assert_awaited_once_with("google pixel 8")
        context = _sent_context(llm)
        assert context[0] == Message.system(prompts.product_system_prompt)
        assert '"name":"Google Pixel 8"' in context[-2].content
        assert context[-1].content.startswith(
            'User asked: "What is the price of Google Pixel 8?".'
        )
        assert llm.complete.await_args.kwargs["fallback"] == "Google Pixel 8 — $699"

    @pytest.mark.asyncio
    async def test_candidates(self, pipeline, tools, llm, products):
        tools.invoke_lookup.return_value = Candidates(results=products)

        envelope = await pipeline.respond("tell me about samsung")

        assert envelope.reply.splitlines() == [
            "I found these products:",
            "• Samsung Galaxy S21 — $699",
            "• Samsung Galaxy S22 — $799",
            "• Google Pixel 8 — $699",
        ]
        llm.complete.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("outcome", [NotFound(), Candidates(results=[])])
    async def test_no_match(self, pipeline, tools, outcome):
        tools.invoke_lookup.return_value = outcome

        envelope = await pipeline.respond("tell me about Phone Z")

        assert envelope.to_payload()["reply"] == "No matching product found."

    @pytest.mark.asyncio
    async def test_query_not_meaningful(self, pipeline, tools):
        envelope = await pipeline.respond("tell me about ?")

        assert envelope.reply == "No matching product found."
        tools.invoke_lookup.assert_not_called()

    @pytest.mark.asyncio
    async def test_tool_error(self, pipeline, tools):
        tools.invoke_lookup.return_value = ToolError(message="db down")

        envelope = await pipeline.respond("price of pixel")

        assert envelope.to_payload() == {"ok": False, "error": "getData tool error"}


class TestFallback:
    @pytest.mark.asyncio
    async def test_conversational_reply(self, pipeline, tools, llm, prompts):
        envelope = await pipeline.respond("thanks a lot")

        assert envelope.reply == "LLM reply"
        tools.invoke_lookup.assert_not_called()
        context = _sent_context(llm)
        assert context == [
            Message.system(prompts.fallback_system_prompt),
            Message.user("thanks a lot"),
        ]
        assert llm.complete.await_args.args[1] == 0.7
        assert llm.complete.await_args.kwargs["fallback"] == prompts.fallback_reply

    @pytest.mark.asyncio
    async def test_history_is_bounded(self, pipeline, llm):
        history = [
            {"role": "user" if i % 2 == 0 else "assistant", "content": f"m{i}"}
            for i in range(20)
        ]

        await pipeline.respond("thanks", history)

        context = _sent_context(llm)
        assert len(context) == 1 + 12 + 1
        assert context[1].content == "m8"
        assert [m.role for m in context].count("system") == 1

    @pytest.mark.asyncio
    async def test_malformed_history_is_ignored(self, pipeline, llm):
        envelope = await pipeline.respond("thanks", "not a list")

        assert envelope.ok is True
        assert len(_sent_context(llm)) == 2


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_transport_error(self, pipeline, llm):
        llm.complete.side_effect = TransportError(503, "overloaded")

        envelope = await pipeline.respond("thanks")

        assert envelope.to_payload() == {"ok": False, "error": "LLM service error"}

    @pytest.mark.asyncio
    async def test_configuration_error(self, pipeline, llm):
        llm.complete.side_effect = ConfigurationError("LLM API key is not configured")

        envelope = await pipeline.respond("thanks")

        assert envelope.error == "LLM API key is not configured"

    @pytest.mark.asyncio
    async def test_unexpected_error(self, pipeline, llm):
        llm.complete.side_effect = RuntimeError("kaboom")

        envelope = await pipeline.respond("thanks")

        assert envelope.to_payload() == {"ok": False, "error": "kaboom"}

    @pytest.mark.asyncio
    async def test_unexpected_error_without_message(self, pipeline, llm):
        llm.complete.side_effect = RuntimeError()

        envelope = await pipeline.respond("thanks")

        assert envelope.error == "Error"

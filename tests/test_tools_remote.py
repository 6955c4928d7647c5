"""Tests for the HTTP catalog tools against a mocked tool service."""

import json

import httpx
import pytest

from shopchat.core.models import Candidates, Found, FoundPair, NotFound, ToolError
from shopchat.core.tools import HttpCatalogTools

S21 = {"id": 1, "name": "Samsung Galaxy S21", "price": 699}
S22 = {"id": 2, "name": "Samsung Galaxy S22", "price": 799}


def _tools(tools_config, handler) -> HttpCatalogTools:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpCatalogTools(client, tools_config)


class TestHttpLookup:
    @pytest.mark.asyncio
    async def test_request_shape(self, tools_config):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"ok": True, "product": S21})

        await _tools(tools_config, handler).invoke_lookup("galaxy s21")

        assert seen["url"] == "http://tools.test/api/tool/getData"
        assert seen["body"] == {"query": "galaxy s21"}

    @pytest.mark.asyncio
    async def test_single_product(self, tools_config):
        outcome = await _tools(
            tools_config,
            lambda r: httpx.Response(200, json={"ok": True, "product": S21}),
        ).invoke_lookup("s21")
        assert isinstance(outcome, Found)
        assert outcome.record.name == "Samsung Galaxy S21"

    @pytest.mark.asyncio
    async def test_results(self, tools_config):
        outcome = await _tools(
            tools_config,
            lambda r: httpx.Response(200, json={"ok": True, "results": [S21, S22]}),
        ).invoke_lookup("galaxy")
        assert isinstance(outcome, Candidates)
        assert len(outcome.results) == 2

    @pytest.mark.asyncio
    async def test_empty_results(self, tools_config):
        outcome = await _tools(
            tools_config,
            lambda r: httpx.Response(200, json={"ok": True, "results": []}),
        ).invoke_lookup("nothing")
        assert isinstance(outcome, NotFound)

    @pytest.mark.asyncio
    async def test_ok_false(self, tools_config):
        outcome = await _tools(
            tools_config,
            lambda r: httpx.Response(500, json={"ok": False, "error": "db down"}),
        ).invoke_lookup("galaxy")
        assert outcome == ToolError(message="db down")

    @pytest.mark.asyncio
    async def test_non_json_body(self, tools_config):
        outcome = await _tools(
            tools_config, lambda r: httpx.Response(502, text="Bad Gateway")
        ).invoke_lookup("galaxy")
        assert isinstance(outcome, ToolError)

    @pytest.mark.asyncio
    async def test_transport_failure(self, tools_config):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        outcome = await _tools(tools_config, handler).invoke_lookup("galaxy")
        assert isinstance(outcome, ToolError)
        assert "refused" in outcome.message


class TestHttpCompare:
    @pytest.mark.asyncio
    async def test_found_pair(self, tools_config):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(
                200,
                json={
                    "ok": True,
                    "a": S21,
                    "b": S22,
                    "comparison": {
                        "diffs": ["Price: Samsung Galaxy S21 $699 vs Samsung Galaxy S22 $799"],
                        "recommendation": "Samsung Galaxy S21",
                    },
                },
            )

        outcome = await _tools(tools_config, handler).invoke_compare("S21", "S22")

        assert seen["url"] == "http://tools.test/api/tool/compare"
        assert seen["body"] == {"aName": "S21", "bName": "S22"}
        assert isinstance(outcome, FoundPair)
        assert outcome.recommendation == "Samsung Galaxy S21"
        assert outcome.b.price == 799

    @pytest.mark.asyncio
    async def test_not_found(self, tools_config):
        outcome = await _tools(
            tools_config,
            lambda r: httpx.Response(
                404, json={"ok": False, "error": "Products not found"}
            ),
        ).invoke_compare("X", "Y")
        assert isinstance(outcome, NotFound)

    @pytest.mark.asyncio
    async def test_server_error(self, tools_config):
        outcome = await _tools(
            tools_config,
            lambda r: httpx.Response(500, json={"ok": False, "error": "boom"}),
        ).invoke_compare("X", "Y")
        assert outcome == ToolError(message="boom")

"""Tests for startup and shutdown of the real application lifespan."""

from contextlib import AsyncExitStack
from typing import Annotated

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from shopchat.app import app
from shopchat.infra.lifespan import get_app, inject, startup_request


class TestAppStartup:
    def test_real_lifespan_serves_requests(self):
        with TestClient(app) as client:
            chat = client.post("/api/chat", json={"message": "hello"})
            lookup = client.post("/api/tool/getData", json={"id": 1})
            http_client = app.state.http_client

        assert chat.status_code == 200
        assert chat.json()["ok"] is True
        assert chat.json()["reply"]
        assert lookup.json()["product"]["name"] == "Samsung Galaxy S21"
        assert http_client.is_closed


class TestInject:
    def test_build_steps_run_and_tear_down_in_reverse(self):
        events: list[str] = []

        async def build_first(app: Annotated[FastAPI, Depends(get_app)]):
            app.state.first = "ready"
            events.append("first up")
            yield
            events.append("first down")

        async def build_second():
            events.append("second up")
            yield
            events.append("second down")

        @inject
        async def lifespan(
            app: FastAPI,
            _first: Annotated[None, Depends(build_first)],
            _second: Annotated[None, Depends(build_second)],
        ):
            events.append("serving")
            yield

        test_app = FastAPI(lifespan=lifespan)
        with TestClient(test_app):
            assert test_app.state.first == "ready"

        assert events == [
            "first up",
            "second up",
            "serving",
            "second down",
            "first down",
        ]

    def test_overrides_are_honoured(self):
        built: list[str] = []

        async def build_real():
            built.append("real")
            yield

        async def build_fake():
            built.append("fake")
            yield

        @inject
        async def lifespan(app: FastAPI, _dep: Annotated[None, Depends(build_real)]):
            yield

        test_app = FastAPI(lifespan=lifespan)
        test_app.dependency_overrides[build_real] = build_fake
        with TestClient(test_app):
            pass

        assert built == ["fake"]

    @pytest.mark.asyncio
    async def test_startup_request_carries_exit_stack(self):
        async with AsyncExitStack() as stack:
            request = startup_request(FastAPI(), stack)

        assert request.scope["fastapi_inner_astack"] is stack
        assert request.scope["fastapi_astack"] is stack

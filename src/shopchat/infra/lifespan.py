"""Run ``Depends()`` parameters on the application lifespan.

The outbound HTTP client and the catalog store are built by ``build_*``
async generators declared as lifespan parameters; their code after
``yield`` runs at shutdown.

FastAPI only resolves dependencies against a request, so startup gets a
stand-in request whose scope carries the exit stack that owns every
``build_*`` teardown.  Recent FastAPI releases look that stack up in the
scope instead of taking it as an argument alone.
"""

from contextlib import AsyncExitStack, asynccontextmanager
from functools import partial
from typing import Any, AsyncIterator, Callable

from fastapi import FastAPI, Request
from fastapi.dependencies.utils import get_dependant, solve_dependencies

# Scope keys FastAPI has used for the per-request exit stack over time.
_STACK_SCOPE_KEYS = (
    "fastapi_astack",
    "fastapi_inner_astack",
    "fastapi_function_astack",
)

LifespanFunc = Callable[..., Any]


def get_app(request: Request) -> FastAPI:
    """Dependency for ``build_*`` generators that need the app itself."""
    return request.app


def startup_request(app: FastAPI, stack: AsyncExitStack) -> Request:
    scope: dict[str, Any] = {
        "type": "http",
        "http_version": "1.1",
        "method": "GET",
        "scheme": "http",
        "path": "/",
        "raw_path": b"/",
        "root_path": "",
        "query_string": b"",
        "headers": [],
        "client": None,
        "server": None,
        "app": app,
        "state": app.state,
    }
    scope.update(dict.fromkeys(_STACK_SCOPE_KEYS, stack))
    return Request(scope)


async def _resolve(
    app: FastAPI, lifespan: LifespanFunc, stack: AsyncExitStack
) -> dict[str, Any]:
    solved = await solve_dependencies(
        request=startup_request(app, stack),
        dependant=get_dependant(path="/", call=partial(lifespan, app)),
        async_exit_stack=stack,
        embed_body_fields=False,
        dependency_overrides_provider=app,
    )
    if solved.errors:
        raise RuntimeError(f"Lifespan dependencies failed: {solved.errors}")
    return solved.values


def inject(lifespan: LifespanFunc) -> Callable[[FastAPI], Any]:
    """Decorate an ``async def lifespan(app, ...)`` generator.

    Its ``Depends()`` parameters are resolved once at startup, honouring
    ``app.dependency_overrides``.  Teardowns run in reverse order after
    the lifespan body returns.
    """
    body = asynccontextmanager(lifespan)

    @asynccontextmanager
    async def run(app: FastAPI) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            values = await _resolve(app, lifespan, stack)
            async with body(app, **values):
                yield

    return run

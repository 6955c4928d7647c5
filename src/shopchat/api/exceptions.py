"""Global exception handlers.

Registered while the app is built: Starlette snapshots
``app.exception_handlers`` into its middleware stack on the first ASGI
call, which is the lifespan startup itself.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shopchat.api.tools import TOOL_PREFIX
from shopchat.core.models import ChatResponseEnvelope

logger = logging.getLogger(__name__)

ERROR_INVALID_REQUEST = "invalid request"


async def handle_invalid_request(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """A body that is not a JSON object gets a failure envelope.

    Chat replies always carry HTTP 200 and report failure through ``ok``;
    the tool routes signal bad arguments with 400.
    """
    logger.info(
        "Rejected %s %s: %s", request.method, request.url.path, exc.errors()
    )
    is_tool_call = request.url.path.startswith(TOOL_PREFIX)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST if is_tool_call else status.HTTP_200_OK,
        content=ChatResponseEnvelope.failure(ERROR_INVALID_REQUEST).to_payload(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_invalid_request)

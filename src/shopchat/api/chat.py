"""Chat API endpoint implementation."""

from typing import Any

from fastapi import APIRouter

from .deps import ChatPipelineDep
from .models import ChatRequest, HealthResponse

router = APIRouter(tags=["chat"])


@router.post("/api/chat")
async def chat(
    chat_request: ChatRequest,
    pipeline: ChatPipelineDep,
) -> dict[str, Any]:
    """Answer one message and return the response envelope.

    Always HTTP 200 once the body parses: success or failure is carried
    by the envelope's ``ok`` flag, with ``reply`` and ``assistantMessage``
    on success and ``error`` on failure.
    """
    envelope = await pipeline.respond(chat_request.message, chat_request.messages)
    return envelope.to_payload()


@router.get("/health")
async def health() -> HealthResponse:
    return HealthResponse()

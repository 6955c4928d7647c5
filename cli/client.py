"""API client for the shopchat chat endpoint."""

import logging
from typing import Any

import httpx

from .config import CLIConfig

logger = logging.getLogger(__name__)


class ChatAPIClient:
    """Client for the ``POST /api/chat`` envelope API."""

    def __init__(
        self, config: CLIConfig, transport: httpx.AsyncBaseTransport | None = None
    ):
        self.config = config
        self.client = httpx.AsyncClient(timeout=config.timeout, transport=transport)

    async def chat(
        self, message: str, history: list[dict[str, str]] | None = None
    ) -> dict[str, Any]:
        """Send one message with the prior turns and return the envelope.

        Transport problems come back as a failure envelope whose error
        starts with ``"Network error: "``; they never raise.
        """
        url = self.config.chat_url
        payload: dict[str, Any] = {"message": message, "messages": history or []}

        logger.debug("POST %s with %d prior turns", url, len(payload["messages"]))

        try:
            response = await self.client.post(url, json=payload)
        except httpx.HTTPError as e:
            return {"ok": False, "error": f"Network error: {e}"}

        logger.debug("Response status: %d", response.status_code)

        try:
            data = response.json()
        except ValueError:
            return {
                "ok": False,
                "error": f"HTTP {response.status_code}: {response.text[:200]}",
            }

        if not isinstance(data, dict):
            return {"ok": False, "error": f"HTTP {response.status_code}"}
        return data

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

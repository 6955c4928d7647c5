"""Pipeline exceptions.

Everything is caught at the chat pipeline boundary and turned into an
``ok: false`` envelope; none of these escape the endpoint.
"""


class ShopChatError(Exception):
    """Base class for errors raised inside the chat pipeline."""


class InputValidationError(ShopChatError):
    """Raised when the request itself is unusable (e.g. empty message)."""


class ToolCallError(ShopChatError):
    """Raised by a catalog tool client on transport or storage failure."""

    def __init__(self, tool: str, detail: str) -> None:
        super().__init__(f"{tool}: {detail}")
        self.tool = tool
        self.detail = detail


class ConfigurationError(ShopChatError):
    """Raised when a required setting (e.g. the LLM API key) is missing."""


class TransportError(ShopChatError):
    """Raised when the LLM service answers with a non-success status.

    ``status_code`` is ``0`` when no HTTP response was received at all.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"LLM service error {status_code}: {body}")
        self.status_code = status_code
        self.body = body

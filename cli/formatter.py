"""Renders chat envelopes for the terminal."""

from typing import Any, TextIO

UNKNOWN_ERROR = "Unknown error"


class ResponseFormatter:
    """Writes one envelope as an assistant line or an error line."""

    def __init__(self, output: TextIO):
        self.output = output

    def render(self, envelope: dict[str, Any]) -> str:
        """Text shown for *envelope*: the reply, or ``Error: <error>``."""
        if envelope.get("ok"):
            return str(envelope.get("reply") or "")

        error = str(envelope.get("error") or UNKNOWN_ERROR)
        # Transport failures already carry their own prefix.
        if error.startswith("Network error: "):
            return error
        return f"Error: {error}"

    def handle_envelope(self, envelope: dict[str, Any]) -> None:
        self._print(f"\nAssistant: {self.render(envelope)}\n\n")

    def _print(self, text: str) -> None:
        self.output.write(text)
        self.output.flush()

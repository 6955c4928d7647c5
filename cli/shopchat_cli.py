"""Main CLI loop for interactive chat."""

import logging
import sys
from typing import Any, TextIO

from .client import ChatAPIClient
from .config import CLIConfig
from .formatter import ResponseFormatter

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Hi! Ask about products or say 'Compare Samsung Galaxy S21 and "
    "Samsung Galaxy S22' or 'Give me details about Samsung Galaxy S21.'"
)


class ShopChatCLI:
    """Interactive CLI for the shopchat API.

    The server is stateless, so the conversation lives here and is sent
    along with every message.
    """

    def __init__(
        self,
        config: CLIConfig,
        input_stream: TextIO = sys.stdin,
        output_stream: TextIO = sys.stdout,
        client: ChatAPIClient | None = None,
    ):
        """Initialize the CLI.

        Parameters
        ----------
        config
            CLI configuration.
        input_stream
            Input stream for user input (default: stdin).
        output_stream
            Output stream for responses (default: stdout).
        client
            API client; one is built from *config* when omitted.
        """
        self.config = config
        self.input_stream = input_stream
        self.output_stream = output_stream
        self.client = client or ChatAPIClient(config)
        self.formatter = ResponseFormatter(output_stream)
        self.history: list[dict[str, str]] = [
            {"role": "assistant", "content": WELCOME_MESSAGE}
        ]

    async def run(self) -> None:
        """Run the interactive CLI loop."""
        try:
            self._print_welcome()
            while True:
                try:
                    message = self._get_user_input()
                    if not message.strip():
                        continue

                    if message.strip().lower() in ("exit", "quit", "q"):
                        self._print("Goodbye!\n")
                        break

                    await self.send(message.strip())

                except KeyboardInterrupt:
                    self._print("\n\nInterrupted. Use 'exit' or 'quit' to exit.\n")
                except EOFError:
                    self._print("\nGoodbye!\n")
                    break
        finally:
            await self.client.close()

    async def send(self, message: str) -> dict[str, Any]:
        """Send *message* with the conversation so far and show the reply.

        Only successful exchanges are added to the history.
        """
        envelope = await self.client.chat(message, list(self.history))
        self.formatter.handle_envelope(envelope)

        if envelope.get("ok"):
            self.history.append({"role": "user", "content": message})
            self.history.append(
                {"role": "assistant", "content": str(envelope.get("reply") or "")}
            )
        else:
            logger.debug("Chat request failed: %s", envelope.get("error"))
        return envelope

    def _get_user_input(self) -> str:
        """Get user input from the input stream."""
        self._print("> ")
        line = self.input_stream.readline()
        if not line:
            raise EOFError
        return line.rstrip("\n\r")

    def _print_welcome(self) -> None:
        self._print("Shopchat CLI - product assistant\n")
        self._print(f"Connected to: {self.config.chat_url}\n")
        self._print(
            "Type your message and press Enter. Type 'exit' or 'quit' to exit.\n\n"
        )
        self._print(f"Assistant: {WELCOME_MESSAGE}\n\n")

    def _print(self, text: str) -> None:
        """Print text to output stream."""
        self.output_stream.write(text)
        self.output_stream.flush()


async def main(config: CLIConfig, debug: bool = False) -> None:
    """Run one interactive session against ``config.chat_url``."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s: %(message)s",
        stream=sys.stderr,
    )

    await ShopChatCLI(config).run()

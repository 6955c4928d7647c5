"""Entry point for running the CLI as a module."""

import argparse
import asyncio
import sys

from .config import CLIConfig
from .shopchat_cli import main


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Flags left out stay ``None`` so ``SHOPCHAT_CLI_*`` variables and the
    built-in defaults apply.
    """
    parser = argparse.ArgumentParser(
        description="Interactive CLI for the shopchat API",
        epilog="Unset flags fall back to SHOPCHAT_CLI_HOST, SHOPCHAT_CLI_PORT, "
        "SHOPCHAT_CLI_API_PATH and SHOPCHAT_CLI_TIMEOUT.",
    )
    parser.add_argument("--host", help="Server host (default: localhost)")
    parser.add_argument("--port", type=int, help="Server port (default: 8000)")
    parser.add_argument("--api-path", help="Chat endpoint path (default: /api/chat)")
    parser.add_argument(
        "--timeout", type=float, help="Seconds to wait for a reply (default: 90)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def cli_entry() -> None:
    """CLI entry point."""
    args = parse_args()

    try:
        asyncio.run(main(CLIConfig.from_args(args), debug=args.debug))
    except KeyboardInterrupt:
        sys.exit(0)


if __name__ == "__main__":
    cli_entry()

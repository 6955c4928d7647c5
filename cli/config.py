"""Where the CLI sends chat messages.

Values come from ``SHOPCHAT_CLI_*`` environment variables; command-line
flags given explicitly win over them.
"""

import argparse

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class CLIConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SHOPCHAT_CLI_", extra="ignore")

    host: str = "localhost"
    port: int = Field(default=8000, ge=1, le=65535)
    api_path: str = "/api/chat"
    timeout: float = Field(
        default=90.0, gt=0, description="Seconds to wait for one reply"
    )

    @field_validator("api_path")
    @classmethod
    def _leading_slash(cls, value: str) -> str:
        value = value.strip()
        return value if value.startswith("/") else f"/{value}"

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "CLIConfig":
        """Environment-backed config with the flags the user passed on top."""
        overrides = {
            name: getattr(args, name)
            for name in ("host", "port", "api_path", "timeout")
            if getattr(args, name, None) is not None
        }
        return cls(**overrides)

    @property
    def chat_url(self) -> str:
        return f"http://{self.host}:{self.port}{self.api_path}"

"""Configuration management using pydantic-settings.

**Not a singleton** — each call to ``get_app_config()`` re-reads config
from disk so that ConfigMap updates are picked up without restarting.

Priority order (highest first):

1. ConfigMap YAML (path from ``SHOPCHAT_CONFIGMAP_FILE`` env var, hot-reloadable)
2. Environment variables (``SHOPCHAT_`` prefix)
3. ``.env`` dotenv file
4. Static YAML (``configs/config.yaml``)
5. Prompt YAML (``configs/prompt.yml``, fills the ``prompt`` section)
6. Init defaults / field defaults
7. File secrets
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from .system import (
    CatalogConfig,
    ChatConfig,
    LLMConfig,
    LoggingConfig,
    PromptConfig,
    ToolsConfig,
    TracingConfig,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Path constants
# ---------------------------------------------------------------------------

CONFIG_PY_PATH = Path(__file__).resolve()
PROJECT_ROOT = CONFIG_PY_PATH.parent.parent.parent.parent
CONFIG_DIR = PROJECT_ROOT / "configs"

STATIC_CONFIG_FILE = CONFIG_DIR / "config.yaml"

PROMPT_CONFIG_FILE = CONFIG_DIR / "prompt.yml"

_configmap_env = os.environ.get("SHOPCHAT_CONFIGMAP_FILE")
CONFIGMAP_CONFIG_FILE: Optional[Path] = Path(_configmap_env) if _configmap_env else None

DOTENV_FILE_PATH = PROJECT_ROOT / ".env"
ENV_DELIMITER = "__"  # Nested environment variable delimiter
ENV_PREFIX = "SHOPCHAT_"

DEFAULT_ENCODING = "utf-8"


# ---------------------------------------------------------------------------
# Application config (re-created on every call — not a singleton)
# ---------------------------------------------------------------------------


class AppConfig(BaseSettings):
    """Application configuration."""

    model_config = SettingsConfigDict(
        env_file=DOTENV_FILE_PATH,
        env_file_encoding=DEFAULT_ENCODING,
        env_nested_delimiter=ENV_DELIMITER,
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
        yaml_file=STATIC_CONFIG_FILE,
        yaml_file_encoding=DEFAULT_ENCODING,
    )

    llm: LLMConfig = Field(
        default_factory=LLMConfig,
        description="LLM completion service settings",
    )

    chat: ChatConfig = Field(
        default_factory=ChatConfig, description="Chat pipeline settings"
    )

    tools: ToolsConfig = Field(
        default_factory=ToolsConfig,
        description="Catalog tool backend settings",
    )

    catalog: CatalogConfig = Field(
        default_factory=CatalogConfig,
        description="Read-only catalog settings",
    )

    prompt: PromptConfig = Field(
        default_factory=PromptConfig,
        description="Canned replies and system prompts",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )

    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="OpenTelemetry tracing settings",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = []

        # 1. ConfigMap YAML -- highest priority (hot-reloadable)
        if CONFIGMAP_CONFIG_FILE is not None and CONFIGMAP_CONFIG_FILE.is_file():
            sources.append(
                YamlConfigSettingsSource(
                    settings_cls,
                    yaml_file=CONFIGMAP_CONFIG_FILE,
                )
            )

        # 2-3. Env vars and dotenv
        sources.append(env_settings)
        sources.append(dotenv_settings)

        # 4. Static YAML
        sources.append(YamlConfigSettingsSource(settings_cls))

        # 5. Prompt YAML (separate file)
        sources.append(_PromptYamlSettingsSource(settings_cls))

        # 6-7. Init defaults and file secrets
        sources.append(init_settings)
        sources.append(file_secret_settings)

        return tuple(sources)


class _PromptYamlSettingsSource(PydanticBaseSettingsSource):
    """Settings source that maps ``prompt.yml`` onto the ``prompt`` section."""

    def __init__(self, settings_cls: type[BaseSettings]) -> None:
        super().__init__(settings_cls)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        # Unused: __call__ returns the whole mapping at once.
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        if not PROMPT_CONFIG_FILE.exists():
            return {}

        try:
            with open(PROMPT_CONFIG_FILE, encoding=DEFAULT_ENCODING) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError):
            logger.warning(
                "Ignoring unreadable prompt file %s", PROMPT_CONFIG_FILE
            )
            return {}

        if isinstance(data, dict) and data:
            return {"prompt": data}
        return {}


def get_app_config() -> AppConfig:
    """Get the application configuration.

    Re-reads ``configs/config.yaml`` (and the ConfigMap override when
    present) on every call so that hot-reloaded values are picked up
    immediately.
    """
    return AppConfig()


def get_llm_config() -> LLMConfig:
    return get_app_config().llm


def get_chat_config() -> ChatConfig:
    return get_app_config().chat


def get_tools_config() -> ToolsConfig:
    return get_app_config().tools

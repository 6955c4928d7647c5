"""FastAPI dependency factory for the LLM gateway."""

from typing import Annotated

import httpx
from fastapi import Depends

from shopchat.configs.config import get_llm_config
from shopchat.configs.system import LLMConfig
from shopchat.infra.http_client import get_http_client

from .gateway import LLMGateway


def get_llm_gateway(
    config: Annotated[LLMConfig, Depends(get_llm_config)],
    client: Annotated[httpx.AsyncClient, Depends(get_http_client)],
) -> LLMGateway:
    """Gateway bound to the shared HTTP client and the current LLM config."""
    return LLMGateway(config, client)

"""FastAPI dependency factory for the chat pipeline.

Per-request, with an explicit ``Depends`` chain: tool backend, LLM
gateway and the config sections the pipeline reads.
"""

from typing import Annotated

from fastapi import Depends

from shopchat.configs.config import AppConfig, get_app_config

from .llm import LLMGateway, get_llm_gateway
from .pipeline import ChatPipeline
from .tools import CatalogTools, get_catalog_tools


def get_chat_pipeline(
    tools: Annotated[CatalogTools, Depends(get_catalog_tools)],
    llm: Annotated[LLMGateway, Depends(get_llm_gateway)],
    config: Annotated[AppConfig, Depends(get_app_config)],
) -> ChatPipeline:
    return ChatPipeline(
        tools,
        llm,
        llm_config=config.llm,
        chat_config=config.chat,
        prompts=config.prompt,
    )

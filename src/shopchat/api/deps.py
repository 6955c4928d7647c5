"""Centralized FastAPI dependency type aliases.

Route modules import these ``*Dep`` aliases instead of spelling out
``Annotated[T, Depends(get_xxx)]``.  Each alias maps to one ``get_*``
factory, which tests replace via ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends

from shopchat.catalog.deps import get_catalog_store
from shopchat.catalog.store import CatalogStore
from shopchat.configs.config import get_tools_config
from shopchat.configs.system import ToolsConfig
from shopchat.core.deps import get_chat_pipeline
from shopchat.core.pipeline import ChatPipeline

CatalogStoreDep = Annotated[CatalogStore, Depends(get_catalog_store)]
ChatPipelineDep = Annotated[ChatPipeline, Depends(get_chat_pipeline)]
ToolsConfigDep = Annotated[ToolsConfig, Depends(get_tools_config)]

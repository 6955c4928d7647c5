"""LLM completion gateway."""

from .deps import get_llm_gateway  # noqa: F401
from .gateway import CompletionResponse, LLMGateway, decode_text  # noqa: F401

"""LLM adapter implementations for various providers."""

from .base import BaseLLMAdapter
from .factory import AdapterFactory, create_adapter, create_adapter_from_config
from .openai_adapter import OpenAIAdapter
from ..models.common import Message, LLMRequest, ArrayResponse, TokenUsage
from ..models.capabilities import ProviderCapabilities

__all__ = [
    "BaseLLMAdapter",
    "AdapterFactory",
    "create_adapter",
    "create_adapter_from_config",
    "OpenAIAdapter",
    "Message",
    "LLMRequest",
    "ArrayResponse",
    "TokenUsage",
    "ProviderCapabilities",
]

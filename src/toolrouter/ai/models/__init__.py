"""Data models shared by the LLM adapters."""

from .common import (
    MessageRole, Message, TokenUsage, LLMRequest, ArrayResponse,
    ErrorInfo, RequestMetadata,
)
from .capabilities import ProviderCapabilities, get_openai_capabilities

__all__ = [
    "MessageRole",
    "Message",
    "TokenUsage",
    "LLMRequest",
    "ArrayResponse",
    "ErrorInfo",
    "RequestMetadata",
    "ProviderCapabilities",
    "get_openai_capabilities",
]

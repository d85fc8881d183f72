"""Exception types raised by the toolrouter AI layer."""

from typing import Optional


class ToolRouterError(Exception):
    """Base class for toolrouter errors."""


class ConfigurationError(ToolRouterError):
    """Raised when required configuration is missing or invalid."""


class LLMAdapterError(ToolRouterError):
    """Raised when an LLM provider returns something the adapter cannot use."""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(message)
        self.provider = provider


class StructuredOutputError(LLMAdapterError):
    """Raised when a structured-output response does not match the requested schema."""

    def __init__(self, message: str, raw_content: Optional[str] = None,
                 provider: Optional[str] = None):
        super().__init__(message, provider=provider)
        self.raw_content = raw_content

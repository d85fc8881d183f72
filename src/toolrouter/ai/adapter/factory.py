"""Adapter construction from a provider name or an orchestrator config."""

from typing import Dict, Optional, Type, TYPE_CHECKING

from .base import BaseLLMAdapter
from .openai_adapter import OpenAIAdapter

if TYPE_CHECKING:
    from ..config import OrchestratorConfig


class AdapterFactory:
    """Looks up adapter classes by provider name."""

    # Provider name -> adapter class; "openai" also covers OpenAI-compatible servers
    _adapters: Dict[str, Type[BaseLLMAdapter]] = {
        "openai": OpenAIAdapter,
    }

    @classmethod
    def register_adapter(cls, provider: str, adapter_class: Type[BaseLLMAdapter]):
        cls._adapters[provider] = adapter_class

    @classmethod
    def create_adapter(
        cls,
        model: str,
        provider: str = "openai",
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        **kwargs
    ) -> BaseLLMAdapter:
        """Create an adapter for the given model and provider.

        Raises:
            ValueError: If provider is unsupported
        """
        adapter_class = cls._adapters.get(provider)
        if adapter_class is None:
            available = ", ".join(cls._adapters.keys())
            raise ValueError(f"Unsupported provider '{provider}'. Available: {available}")

        return adapter_class(model=model, api_key=api_key, base_url=base_url, **kwargs)

    @classmethod
    def from_config(cls, config: 'OrchestratorConfig') -> BaseLLMAdapter:
        """Create the adapter an orchestrator config asks for."""
        return cls.create_adapter(
            config.model,
            provider=config.provider,
            base_url=config.base_url,
            api_key=config.api_key,
        )

    @classmethod
    def get_available_providers(cls) -> list[str]:
        return list(cls._adapters.keys())


def create_adapter(model: str, **kwargs) -> BaseLLMAdapter:
    """Create an adapter instance (convenience function)."""
    return AdapterFactory.create_adapter(model, **kwargs)


def create_adapter_from_config(config: 'OrchestratorConfig') -> BaseLLMAdapter:
    return AdapterFactory.from_config(config)

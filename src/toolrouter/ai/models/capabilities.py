"""Provider capabilities model for LLM adapters."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ProviderCapabilities:
    """Defines the capabilities of an LLM provider."""

    supports_structured_output: bool
    supports_system_messages: bool
    max_tokens: int
    max_context_length: int
    supports_json_mode: bool = False

    # Cost information (for API providers)
    cost_per_input_token: Optional[float] = None
    cost_per_output_token: Optional[float] = None


def get_openai_capabilities(model: str = "gpt-4o-mini") -> ProviderCapabilities:
    """Get capabilities for OpenAI models."""
    base_capabilities = ProviderCapabilities(
        supports_structured_output=True,
        supports_system_messages=True,
        max_tokens=16384,
        max_context_length=128000,
        supports_json_mode=True,
        cost_per_input_token=0.0000025,  # gpt-4o pricing
        cost_per_output_token=0.000010,
    )

    model_lower = model.lower()
    if "gpt-4o-mini" in model_lower:
        base_capabilities.cost_per_input_token = 0.00000015
        base_capabilities.cost_per_output_token = 0.0000006
    elif "gpt-3.5" in model_lower:
        # No json_schema response format on the 3.5 family
        base_capabilities.supports_structured_output = False
        base_capabilities.max_tokens = 4096
        base_capabilities.max_context_length = 16385
        base_capabilities.cost_per_input_token = 0.0000005
        base_capabilities.cost_per_output_token = 0.0000015
    elif model_lower.startswith("gpt-4.1"):
        base_capabilities.max_context_length = 1047576
        base_capabilities.max_tokens = 32768

    return base_capabilities

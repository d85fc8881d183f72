"""LLM-driven tool selection for toolrouter.

This package asks a language model which tools a conversation needs and
enforces the confirmation-flow policy on the answer.
"""

from .config import OrchestratorConfig, get_orchestrator_config_from_env
from .exceptions import ToolRouterError, ConfigurationError, LLMAdapterError, StructuredOutputError
from .orchestrator import (
    ToolOrchestrator,
    OrchestratorResult,
    apply_confirmation_policy,
    SEARCH_TOKEN_TOOL,
    ASK_FOR_CONFIRMATION_TOOL,
)
from .prompts import PromptGenerator
from .tools import ToolContext, ToolDefinition, ToolCall, ToolResult, ToolRegistry, ToolExecutor

__all__ = [
    # Configuration
    'OrchestratorConfig',
    'get_orchestrator_config_from_env',

    # Errors
    'ToolRouterError',
    'ConfigurationError',
    'LLMAdapterError',
    'StructuredOutputError',

    # Orchestration
    'ToolOrchestrator',
    'OrchestratorResult',
    'apply_confirmation_policy',
    'SEARCH_TOKEN_TOOL',
    'ASK_FOR_CONFIRMATION_TOOL',

    # Prompts
    'PromptGenerator',

    # Tool system
    'ToolContext',
    'ToolDefinition',
    'ToolCall',
    'ToolResult',
    'ToolRegistry',
    'ToolExecutor',
]

"""System prompt generation for tool selection.

The orchestration prompt is configuration: a prompt supplied through
``OrchestratorConfig`` is used verbatim, otherwise one is generated from
the tool registry.
"""

from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .tools import ToolRegistry


ORCHESTRATION_PROMPT_TEMPLATE = """You are the tool orchestrator for a crypto assistant.
Read the conversation and decide which tools the assistant needs to answer the latest user request.

Available tools:
{tool_list}

Rules:
- Return only tool names from the list above, exactly as written.
- Return an empty array when the request can be answered without any tool (greetings, general questions, follow-ups on data already in the conversation).
- Include every tool the request needs, including tools needed to look up inputs for other tools (for example a token search before analysing its mint address).
- Do not explain your choice."""


class PromptGenerator:
    """Generates the orchestration system prompt."""

    def __init__(self, registry: 'ToolRegistry', override: Optional[str] = None):
        self.registry = registry
        self.override = override

    def generate(self) -> str:
        """Return the configured prompt, or build one from the registered tools."""
        if self.override:
            return self.override
        return ORCHESTRATION_PROMPT_TEMPLATE.format(tool_list=self.registry.describe())

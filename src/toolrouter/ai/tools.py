"""Tool system for the assistant.

This module provides the tool infrastructure the orchestrator selects
from: tool definitions, the registry, explicit per-call context, and
execution with result handling.
"""

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional, Type

from pydantic import BaseModel


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolContext:
    """Caller identity passed to every tool invocation."""
    user_id: Optional[str] = None


class ToolDefinition:
    """A tool the assistant may be allowed to call.

    Tools without ``execute`` are client-side: the chat front end handles
    them and the executor refuses to run them.
    """

    def __init__(self, name: str, display_name: str, description: str,
                 parameters: Dict[str, Any],
                 execute: Optional[Callable[..., Awaitable[Any]]] = None,
                 render: Optional[Callable[[Any], Any]] = None,
                 result_model: Optional[Type[BaseModel]] = None,
                 is_collapsible: bool = False,
                 is_expanded_by_default: bool = False):
        self.name = name
        self.display_name = display_name
        self.description = description
        self.parameters = parameters
        self.execute = execute
        self.render = render
        self.result_model = result_model
        self.is_collapsible = is_collapsible
        self.is_expanded_by_default = is_expanded_by_default

    @property
    def is_client_side(self) -> bool:
        return self.execute is None

    def parse_result(self, data: Any) -> Any:
        """Turn stored JSON data back into this tool's result type."""
        if self.result_model is None or isinstance(data, self.result_model):
            return data
        return self.result_model.model_validate(data)

    def to_openai(self) -> Dict[str, Any]:
        """Convert to OpenAI function format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            }
        }

    def __repr__(self) -> str:
        return f"ToolDefinition(name='{self.name}')"


class ToolCall:
    """Represents a request to call a tool."""

    def __init__(self, id: str, tool_name: str, input: Dict[str, Any]):
        self.id = id
        self.tool_name = tool_name
        self.input = input


class ToolResult:
    """Represents the result of a tool call."""

    def __init__(self, tool_call_id: str, output: Any, error: Optional[str] = None):
        self.tool_call_id = tool_call_id
        self.output = output
        self.error = error

    @property
    def is_error(self) -> bool:
        return self.error is not None


class ToolRegistry:
    """Name-indexed collection of tool definitions."""

    def __init__(self, tools: Optional[Iterable[ToolDefinition]] = None):
        self._tools: Dict[str, ToolDefinition] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: ToolDefinition) -> None:
        if tool.name in self._tools:
            logger.warning(f"Tool '{tool.name}' already registered, replacing")
        self._tools[tool.name] = tool
        logger.debug(f"Tool registered: {tool.name}")

    def get(self, name: str) -> Optional[ToolDefinition]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools.keys())

    def unknown(self, names: Iterable[str]) -> List[str]:
        """Return the names that are not registered."""
        return [name for name in names if name not in self._tools]

    def subset(self, names: Iterable[str]) -> List[ToolDefinition]:
        """Definitions for the given names, skipping unknown ones."""
        return [self._tools[name] for name in names if name in self._tools]

    def describe(self) -> str:
        """One line per tool, used when building the orchestration prompt."""
        return "\n".join(f"- {tool.name}: {tool.description}" for tool in self._tools.values())

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self):
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


class ToolExecutor:
    """Executes tool calls against a registry."""

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def execute_tool(self, tool_call: ToolCall, context: ToolContext) -> ToolResult:
        """Execute a tool call for the given caller and return the result."""
        logger.debug(f"Executing tool: {tool_call.tool_name} with input: {tool_call.input}")

        tool = self.registry.get(tool_call.tool_name)
        if tool is None:
            logger.error(f"Tool '{tool_call.tool_name}' not found.")
            return ToolResult(
                tool_call_id=tool_call.id,
                output=None,
                error=f"Tool '{tool_call.tool_name}' not found."
            )

        if tool.is_client_side:
            return ToolResult(
                tool_call_id=tool_call.id,
                output=None,
                error=f"Tool '{tool_call.tool_name}' is handled by the client."
            )

        try:
            if inspect.iscoroutinefunction(tool.execute):
                output = await tool.execute(context, **tool_call.input)
            else:
                output = tool.execute(context, **tool_call.input)
            logger.debug(f"Tool {tool_call.tool_name} executed successfully.")
            return ToolResult(tool_call_id=tool_call.id, output=output)
        except Exception as e:
            logger.error(f"Error executing tool {tool_call.tool_name}: {e}")
            return ToolResult(tool_call_id=tool_call.id, output=None, error=str(e))

    def get_tools_for_openai(self, names: Optional[Iterable[str]] = None) -> List[Dict[str, Any]]:
        """Convert registered tools (or the selected subset) to OpenAI function format."""
        tools = self.registry.subset(names) if names is not None else list(self.registry)
        return [tool.to_openai() for tool in tools]

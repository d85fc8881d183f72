"""Client-side flow tools.

``searchToken`` and ``askForConfirmation`` are handled by the chat front
end. They are registered so the orchestrator prompt lists them and the
selected tool set can be resolved to definitions.
"""

from ..ai.tools import ToolDefinition


def flow_tool_definitions() -> list[ToolDefinition]:
    return [
        ToolDefinition(
            name="searchToken",
            display_name="🔎 Search Token",
            description="Search for a token by name, symbol or address to get its mint address and market data.",
            parameters={
                "type": "object",
                "properties": {
                    "query": {"type": "string", "description": "Token name, symbol or address"},
                },
                "required": ["query"],
            },
        ),
        ToolDefinition(
            name="askForConfirmation",
            display_name="⚠️ Confirmation",
            description="Ask the user to confirm before performing an action on their behalf.",
            parameters={
                "type": "object",
                "properties": {
                    "message": {"type": "string", "description": "The question to show the user"},
                },
                "required": ["message"],
            },
        ),
    ]

"""
Tool Selection Orchestrator

Asks a language model which tools a conversation needs, then applies the
confirmation-flow policy on top of the model's answer.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Union

from .adapter.base import BaseLLMAdapter
from .models.common import LLMRequest, Message, MessageRole, TokenUsage
from .tools import ToolRegistry


logger = logging.getLogger(__name__)

SEARCH_TOKEN_TOOL = "searchToken"
ASK_FOR_CONFIRMATION_TOOL = "askForConfirmation"

TOOL_NAME_DESCRIPTION = "The tool name, describing the tool needed to handle the user request."

MessageLike = Union[Message, Dict[str, Any]]

CHAT_ROLES = frozenset(role.value for role in MessageRole)


@dataclass
class OrchestratorResult:
    """Usage of the classification call plus the tools to enable.

    ``tools_required`` is None when the model asked for no tools. Otherwise
    it is non-empty and free of duplicates.
    """
    usage: TokenUsage
    tools_required: Optional[List[str]]

    @property
    def needs_tools(self) -> bool:
        return self.tools_required is not None


def baseline_tools(confirmation_result_message: Optional[str]) -> List[str]:
    """Tools that are always enabled once any tool is requested.

    After the user has answered a confirmation prompt, asking again is
    pointless, so the confirmation tool is left out.
    """
    if confirmation_result_message:
        return [SEARCH_TOKEN_TOOL]
    return [SEARCH_TOKEN_TOOL, ASK_FOR_CONFIRMATION_TOOL]


def apply_confirmation_policy(candidates: Sequence[str],
                              confirmation_result_message: Optional[str]) -> Optional[List[str]]:
    """Merge the baseline tools into the model's candidates.

    Returns None for an empty candidate list. Otherwise returns the union of
    baseline and candidates, baseline first, each name once.
    """
    if not candidates:
        return None
    return list(dict.fromkeys([*baseline_tools(confirmation_result_message), *candidates]))


class ToolOrchestrator:
    """Selects the tools the assistant may call for the next turn."""

    def __init__(self, adapter: BaseLLMAdapter, orchestration_prompt: str,
                 registry: Optional[ToolRegistry] = None,
                 temperature: float = 0.0, max_tokens: Optional[int] = None):
        """Initialize the orchestrator.

        Args:
            adapter: LLM adapter used for the classification call
            orchestration_prompt: System prompt for the classifier
            registry: Known tools; only used to warn about unknown names
            temperature: Sampling temperature for the classifier
            max_tokens: Optional output token cap for the classifier
        """
        self.adapter = adapter
        self.orchestration_prompt = orchestration_prompt
        self.registry = registry
        self.temperature = temperature
        self.max_tokens = max_tokens

    def build_request(self, messages: Optional[Sequence[MessageLike]]) -> LLMRequest:
        """Build the classification request for a conversation."""
        conversation = []
        for msg in messages or []:
            if isinstance(msg, Message):
                conversation.append(msg)
            elif msg.get("role") in CHAT_ROLES:
                conversation.append(Message.model_validate(msg))
            else:
                # UI-only turns such as the "data" role carry nothing to classify
                logger.debug(f"Skipping conversation turn with role {msg.get('role')!r}")
        return LLMRequest(
            messages=conversation,
            model=self.adapter.model,
            system_message=self.orchestration_prompt,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

    async def get_tools(self, messages: Optional[Sequence[MessageLike]],
                        confirmation_result_message: Optional[str] = None) -> OrchestratorResult:
        """Decide which tools the conversation needs.

        Makes exactly one call to the adapter. Adapter errors are not caught.

        Args:
            messages: Conversation so far, may be None or empty
            confirmation_result_message: The user's answer to an earlier
                confirmation prompt, if this turn resumes one

        Returns:
            OrchestratorResult with the call's usage and the selected tools
        """
        request = self.build_request(messages)
        response = await self.adapter.generate_array(request, TOOL_NAME_DESCRIPTION)

        candidates = response.elements
        logger.debug(f"Orchestrator candidates: {candidates}")

        tools_required = apply_confirmation_policy(candidates, confirmation_result_message)
        if tools_required is None:
            logger.info("Orchestrator selected no tools")
            return OrchestratorResult(usage=response.usage, tools_required=None)

        if self.registry is not None:
            unknown = self.registry.unknown(tools_required)
            if unknown:
                logger.warning(f"Orchestrator returned unregistered tool names: {', '.join(unknown)}")

        logger.info(f"Orchestrator selected tools: {', '.join(tools_required)}")
        return OrchestratorResult(usage=response.usage, tools_required=tools_required)

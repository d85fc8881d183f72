"""Request, response and tracking models shared by the LLM adapters."""

from typing import List, Dict, Any, Optional
from pydantic import BaseModel, Field, field_validator
from datetime import datetime
from enum import Enum


class MessageRole(str, Enum):
    """Chat roles accepted in a conversation."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


class Message(BaseModel):
    """One conversation turn, as stored by the chat front end."""
    role: MessageRole
    content: str
    name: Optional[str] = None
    tool_call_id: Optional[str] = None  # set on tool output turns

    @field_validator("content", mode="before")
    @classmethod
    def _null_content(cls, value: Any) -> Any:
        # Assistant turns that only carry tool calls have null content
        return "" if value is None else value


class TokenUsage(BaseModel):
    """Input and output token counts of one model call."""
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens

    @classmethod
    def from_openai(cls, usage: Any) -> "TokenUsage":
        """Read an OpenAI ``CompletionUsage``; missing usage counts as zero."""
        if usage is None:
            return cls()
        return cls(
            input_tokens=usage.prompt_tokens or 0,
            output_tokens=usage.completion_tokens or 0,
        )


class LLMRequest(BaseModel):
    """A classification request: system prompt plus the conversation so far."""
    messages: List[Message] = Field(default_factory=list)
    model: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: float = 0.0
    system_message: Optional[str] = None

    # Passed straight through to the provider call
    extra_params: Dict[str, Any] = Field(default_factory=dict)

    def get_system_message(self) -> Optional[str]:
        """The explicit system prompt, else the first system turn in the conversation."""
        if self.system_message:
            return self.system_message
        return next(
            (msg.content for msg in self.messages if msg.role == MessageRole.SYSTEM),
            None,
        )

    def get_conversation_messages(self) -> List[Message]:
        """Conversation turns to send after the system prompt, in order.

        Only a system turn promoted to the system prompt is left out; with an
        explicit ``system_message`` every turn is kept.
        """
        if self.system_message:
            return list(self.messages)

        conversation = []
        promoted = False
        for msg in self.messages:
            if msg.role == MessageRole.SYSTEM and not promoted:
                promoted = True
                continue
            conversation.append(msg)
        return conversation


class ArrayResponse(BaseModel):
    """Structured response holding a list of free-form strings."""
    elements: List[str]
    usage: TokenUsage
    model: str
    response_id: Optional[str] = None
    created: datetime = Field(default_factory=datetime.now)


class ErrorInfo(BaseModel):
    """A failed provider call."""
    error_type: str
    message: str
    timestamp: datetime = Field(default_factory=datetime.now)
    is_recoverable: bool = True


class RequestMetadata(BaseModel):
    """Tracking record for one adapter call."""
    request_id: str
    provider: str
    model: str
    start_time: datetime
    end_time: Optional[datetime] = None
    total_duration: Optional[float] = None
    token_count_estimate: Optional[int] = None
    actual_token_usage: Optional[TokenUsage] = None
    element_count: Optional[int] = None
    error: Optional[ErrorInfo] = None

    @property
    def succeeded(self) -> bool:
        return self.end_time is not None and self.error is None

    def _finish(self) -> None:
        self.end_time = datetime.now()
        self.total_duration = (self.end_time - self.start_time).total_seconds()

    def mark_completed(self, response: ArrayResponse) -> None:
        """Record a successful call and what it returned."""
        self._finish()
        self.actual_token_usage = response.usage
        self.element_count = len(response.elements)

    def mark_failed(self, error: ErrorInfo) -> None:
        self._finish()
        self.error = error

"""OpenAI adapter implementation with JSON-schema structured outputs."""

import json
import logging
import os
from typing import Any, Dict, List, Optional

import tiktoken
from openai import AsyncOpenAI
from openai.types.chat import ChatCompletionMessageParam
from pydantic import BaseModel, ValidationError

from .base import BaseLLMAdapter
from ..exceptions import ConfigurationError, StructuredOutputError
from ..models.common import (
    ArrayResponse,
    LLMRequest,
    Message,
    MessageRole,
    TokenUsage,
)
from ..models.capabilities import ProviderCapabilities, get_openai_capabilities


logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"

# Pricing per 1M tokens
PRICING = {
    "gpt-4o": {"input": 2.5, "output": 10.0},
    "gpt-4o-mini": {"input": 0.15, "output": 0.6},
    "gpt-4.1": {"input": 2.0, "output": 8.0},
    "gpt-4.1-mini": {"input": 0.4, "output": 1.6},
    "gpt-4.1-nano": {"input": 0.1, "output": 0.4},
    "o4-mini": {"input": 1.1, "output": 4.4},
}


class _ArrayEnvelope(BaseModel):
    """Object root wrapping the requested array (structured outputs need an object)."""
    elements: List[str]


class OpenAIAdapter(BaseLLMAdapter):
    """OpenAI adapter for structured classification calls."""

    def __init__(self, model: str, api_key: Optional[str] = None,
                 base_url: Optional[str] = None, client: Optional[AsyncOpenAI] = None):
        """Initialize OpenAI adapter.

        Args:
            model: Model name; falls back to gpt-4o-mini when empty
            api_key: API key, or OPENAI_API_KEY from the environment
            base_url: Optional OpenAI-compatible endpoint
            client: Pre-built client (mainly for tests)
        """
        super().__init__(model=model or DEFAULT_MODEL, api_key=api_key, base_url=base_url)

        self.api_key = api_key or os.getenv("OPENAI_API_KEY")
        if not self.api_key and client is None:
            raise ConfigurationError("OpenAI API key is required")

        if client is not None:
            self.client = client
        else:
            client_kwargs: Dict[str, Any] = {"api_key": self.api_key}
            if base_url:
                client_kwargs["base_url"] = base_url
            self.client = AsyncOpenAI(**client_kwargs)

        self._encoding = None

    @property
    def capabilities(self) -> ProviderCapabilities:
        """Return OpenAI capabilities."""
        return get_openai_capabilities(self.model)

    def _get_encoding(self):
        """Load the tiktoken encoding on first use."""
        if self._encoding is None:
            try:
                self._encoding = tiktoken.encoding_for_model(self.model)
            except KeyError:
                # Newer or third-party model names
                self._encoding = tiktoken.get_encoding("cl100k_base")
        return self._encoding

    def count_tokens(self, text: str) -> int:
        """Count tokens using tiktoken."""
        return len(self._get_encoding().encode(text))

    def estimate_cost(self, input_tokens: int, output_tokens: int) -> float:
        """Estimate cost based on OpenAI pricing."""
        rates = PRICING.get(self.model, PRICING[DEFAULT_MODEL])

        input_cost = (input_tokens / 1_000_000) * rates["input"]
        output_cost = (output_tokens / 1_000_000) * rates["output"]

        return input_cost + output_cost

    @staticmethod
    def build_array_schema(item_description: str) -> Dict[str, Any]:
        """Build the strict json_schema response format for a string array."""
        return {
            "type": "json_schema",
            "json_schema": {
                "name": "string_array",
                "strict": True,
                "schema": {
                    "type": "object",
                    "properties": {
                        "elements": {
                            "type": "array",
                            "items": {
                                "type": "string",
                                "description": item_description,
                            },
                        },
                    },
                    "required": ["elements"],
                    "additionalProperties": False,
                },
            },
        }

    def _build_params(self, request: LLMRequest) -> Dict[str, Any]:
        """Build API parameters from request."""
        params: Dict[str, Any] = {
            "model": request.model or self.model,
            "temperature": request.temperature,
        }

        if request.max_tokens:
            params["max_tokens"] = request.max_tokens

        params.update(request.extra_params)
        return params

    def _prepare_messages(self, request: LLMRequest) -> List[ChatCompletionMessageParam]:
        """Convert the request's system prompt and conversation to OpenAI format."""
        prepared: List[ChatCompletionMessageParam] = []

        system_msg = request.get_system_message()
        if system_msg:
            prepared.append({"role": "system", "content": system_msg})

        for msg in request.get_conversation_messages():
            prepared.append(self._prepare_message(msg))
        return prepared

    @staticmethod
    def _prepare_message(msg: Message) -> ChatCompletionMessageParam:
        if msg.role == MessageRole.TOOL:
            if msg.tool_call_id:
                return {"role": "tool", "content": msg.content, "tool_call_id": msg.tool_call_id}
            # Tool output recorded without a call id, keep it as assistant context
            return {"role": "assistant", "content": msg.content}
        return {"role": msg.role.value, "content": msg.content}

    async def _generate_array(self, request: LLMRequest, item_description: str) -> ArrayResponse:
        """Non-streaming structured completion returning a list of strings."""
        params = self._build_params(request)
        params["messages"] = self._prepare_messages(request)
        params["response_format"] = self.build_array_schema(item_description)

        response = await self.client.chat.completions.create(**params)

        message = response.choices[0].message
        if getattr(message, "refusal", None):
            raise StructuredOutputError(
                f"Model refused to answer: {message.refusal}",
                provider=self.provider_name,
            )

        content = message.content
        if not content:
            raise StructuredOutputError(
                "Model returned no content for a structured request",
                provider=self.provider_name,
            )

        try:
            envelope = _ArrayEnvelope.model_validate(json.loads(content))
        except json.JSONDecodeError as e:
            raise StructuredOutputError(
                f"Response is not valid JSON: {e}",
                raw_content=content,
                provider=self.provider_name,
            ) from e
        except ValidationError as e:
            raise StructuredOutputError(
                f"Response does not match the array schema: {e.error_count()} error(s)",
                raw_content=content,
                provider=self.provider_name,
            ) from e

        return ArrayResponse(
            elements=envelope.elements,
            usage=TokenUsage.from_openai(response.usage),
            model=response.model,
            response_id=response.id,
        )

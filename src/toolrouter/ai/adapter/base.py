"""Abstract base adapter for LLM providers."""

from abc import ABC, abstractmethod
from typing import Iterator, List, Optional
import logging
import uuid
from datetime import datetime

from ..exceptions import ConfigurationError, StructuredOutputError
from ..models.common import (
    LLMRequest, ArrayResponse, TokenUsage, RequestMetadata, ErrorInfo
)
from ..models.capabilities import ProviderCapabilities


logger = logging.getLogger(__name__)

# Error text that retrying the same request will not fix
_FATAL_ERROR_TERMS = ("unauthorized", "api key", "permission", "context length", "token limit")


class BaseLLMAdapter(ABC):
    """Abstract base class for all LLM provider adapters."""

    def __init__(self, model: str, api_key: Optional[str] = None, base_url: Optional[str] = None):
        self.model = model
        self.api_key = api_key
        self.base_url = base_url

        self._request_history: List[RequestMetadata] = []

    @property
    @abstractmethod
    def capabilities(self) -> ProviderCapabilities:
        """Return the capabilities of this provider."""
        pass

    @property
    def provider_name(self) -> str:
        """Return the name of this provider."""
        return self.__class__.__name__.replace("Adapter", "").lower()

    # Structured output

    async def generate_array(self, request: LLMRequest, item_description: str) -> ArrayResponse:
        """
        Ask the model for a JSON array of strings.

        The call is recorded in the adapter's history whether it succeeds
        or fails. Provider errors are re-raised unchanged and never retried.

        Args:
            request: System prompt plus conversation
            item_description: Description attached to each array item in the schema

        Returns:
            ArrayResponse with the parsed elements and token usage
        """
        metadata = RequestMetadata(
            request_id=str(uuid.uuid4()),
            provider=self.provider_name,
            model=request.model or self.model,
            start_time=datetime.now(),
            token_count_estimate=self.estimate_request_tokens(request),
        )
        self._request_history.append(metadata)

        try:
            response = await self._generate_array(request, item_description)
        except Exception as e:
            metadata.mark_failed(ErrorInfo(
                error_type=type(e).__name__,
                message=str(e),
                is_recoverable=self._is_recoverable_error(e),
            ))
            logger.warning(f"{self.provider_name} request {metadata.request_id} failed: {type(e).__name__}")
            raise

        metadata.mark_completed(response)
        logger.debug(
            f"{self.provider_name} returned {len(response.elements)} element(s) "
            f"using {response.usage.total_tokens} tokens"
        )
        return response

    @abstractmethod
    async def _generate_array(self, request: LLMRequest, item_description: str) -> ArrayResponse:
        """Provider-specific structured array generation."""
        pass

    # Token and cost management

    @abstractmethod
    def count_tokens(self, text: str) -> int:
        """Count tokens in the given text for this model."""
        pass

    def estimate_request_tokens(self, request: LLMRequest) -> int:
        """Estimate input tokens: system prompt plus every conversation turn."""
        texts = [msg.content for msg in request.get_conversation_messages()]
        system_msg = request.get_system_message()
        if system_msg:
            texts.append(system_msg)
        return sum(self.count_tokens(text) for text in texts)

    @abstractmethod
    def estimate_cost(self, input_tokens: int, output_tokens: int) -> float:
        """Estimate the cost for the given token usage."""
        pass

    # Request tracking

    def _is_recoverable_error(self, error: Exception) -> bool:
        """Whether the same request could succeed later. Informational only."""
        if isinstance(error, ConfigurationError):
            return False
        if isinstance(error, StructuredOutputError):
            return True
        error_str = str(error).lower()
        return not any(term in error_str for term in _FATAL_ERROR_TERMS)

    def _completed_usage(self) -> Iterator[TokenUsage]:
        for metadata in self._request_history:
            if metadata.actual_token_usage:
                yield metadata.actual_token_usage

    def get_request_history(self) -> List[RequestMetadata]:
        """Get history of requests made to this adapter."""
        return self._request_history.copy()

    def get_total_tokens_used(self) -> int:
        """Tokens used by all successful requests."""
        return sum(usage.total_tokens for usage in self._completed_usage())

    def get_total_cost(self) -> float:
        """Estimated cost of all successful requests."""
        return sum((
            self.estimate_cost(usage.input_tokens, usage.output_tokens)
            for usage in self._completed_usage()
        ), 0.0)

    def can_handle_request(self, request: LLMRequest) -> tuple[bool, List[str]]:
        """
        Check if this adapter can serve a structured classification request.

        Returns:
            Tuple of (can_handle, list_of_issues)
        """
        issues = []

        estimated_tokens = self.estimate_request_tokens(request)
        if estimated_tokens > self.capabilities.max_context_length:
            issues.append(
                f"Request tokens ({estimated_tokens}) exceed context length "
                f"({self.capabilities.max_context_length})"
            )

        if not self.capabilities.supports_structured_output:
            issues.append("Provider does not support structured output")

        return len(issues) == 0, issues

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(model='{self.model}', provider='{self.provider_name}')"

"""Test doubles for the LLM adapter and the external services."""

from typing import List, Optional

from toolrouter.ai.adapter.base import BaseLLMAdapter
from toolrouter.ai.models.capabilities import ProviderCapabilities
from toolrouter.ai.models.common import ArrayResponse, LLMRequest, TokenUsage
from toolrouter.tools.telegram import UsernameCheck


class FakeAdapter(BaseLLMAdapter):
    """Adapter returning canned elements, or raising a canned error."""

    def __init__(self, elements: Optional[List[str]] = None, usage: Optional[TokenUsage] = None,
                 error: Optional[Exception] = None):
        super().__init__(model="fake-model")
        self.elements = elements or []
        self.usage = usage or TokenUsage(input_tokens=120, output_tokens=8)
        self.error = error
        self.calls = []

    @property
    def capabilities(self) -> ProviderCapabilities:
        return ProviderCapabilities(
            supports_structured_output=True,
            supports_system_messages=True,
            max_tokens=1024,
            max_context_length=4096,
        )

    async def _generate_array(self, request: LLMRequest, item_description: str) -> ArrayResponse:
        self.calls.append((request, item_description))
        if self.error:
            raise self.error
        return ArrayResponse(elements=list(self.elements), usage=self.usage, model=self.model)

    def count_tokens(self, text: str) -> int:
        return len(text) // 4

    def estimate_cost(self, input_tokens: int, output_tokens: int) -> float:
        return (input_tokens + output_tokens) * 0.000001


class FakeNotificationService:
    """In-memory notification service recording what it was asked to do."""

    def __init__(self, stored_usernames=None, send_response=None, verify_response=None,
                 error: Optional[Exception] = None):
        self.stored_usernames = stored_usernames or {}
        self.send_response = send_response
        self.verify_response = verify_response
        self.error = error
        self.sent = []
        self.verified = []

    async def check_username(self, user_id):
        return UsernameCheck(username=self.stored_usernames.get(user_id))

    async def send_notification(self, username, text, user_id):
        if self.error:
            raise self.error
        self.sent.append((username, text, user_id))
        return self.send_response

    async def verify_setup(self, username, user_id):
        if self.error:
            raise self.error
        self.verified.append((username, user_id))
        return self.verify_response


class FakeBundleService:
    def __init__(self, analysis=None, error: Optional[Exception] = None):
        self.analysis = analysis
        self.error = error
        self.calls = []

    async def analyze_mint_bundles(self, mint_address, min_slot_transactions):
        self.calls.append((mint_address, min_slot_transactions))
        if self.error:
            raise self.error
        return self.analysis


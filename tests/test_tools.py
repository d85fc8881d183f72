import asyncio

import pytest

from toolrouter.ai.tools import ToolCall, ToolContext, ToolDefinition, ToolExecutor, ToolRegistry
from toolrouter.tools import create_default_registry
from toolrouter.tools.bundle import (
    ANALYSIS_FAILED_ERROR,
    MIN_SLOT_TRANSACTIONS,
    BundleResult,
    BundleTools,
)
from toolrouter.tools.telegram import (
    BOT_NOT_STARTED_ERROR,
    MISSING_USERNAME_ERROR,
    NO_RESPONSE_ERROR,
    NotificationResponse,
    TelegramResult,
    TelegramTools,
)

from fakes import FakeBundleService, FakeNotificationService

ALICE = ToolContext(user_id="user-alice")


def run(coro):
    return asyncio.run(coro)


class TestSendTelegramNotification:
    def test_uses_stored_username(self, sent_ok):
        service = FakeNotificationService(stored_usernames={"user-alice": "alice_tg"}, send_response=sent_ok)
        result = run(TelegramTools(service).send_telegram_notification(ALICE, "BONK is up 20%"))

        assert result.success
        assert result.data == "Notification sent successfully"
        assert result.no_follow_up is True
        assert result.bot_id == "neur_bot"
        assert service.sent == [("alice_tg", "BONK is up 20%", "user-alice")]

    def test_explicit_username_wins(self, sent_ok):
        service = FakeNotificationService(stored_usernames={"user-alice": "alice_tg"}, send_response=sent_ok)
        run(TelegramTools(service).send_telegram_notification(ALICE, "hi", username="other_tg"))
        assert service.sent[0][0] == "other_tg"

    def test_missing_username(self, sent_ok):
        service = FakeNotificationService(send_response=sent_ok)
        result = run(TelegramTools(service).send_telegram_notification(ALICE, "hi"))

        assert not result.success
        assert result.error == MISSING_USERNAME_ERROR
        assert service.sent == []

    def test_no_response(self):
        service = FakeNotificationService(stored_usernames={"user-alice": "alice_tg"})
        result = run(TelegramTools(service).send_telegram_notification(ALICE, "hi"))
        assert result == TelegramResult(success=False, error=NO_RESPONSE_ERROR)

    def test_bot_not_started(self):
        service = FakeNotificationService(
            stored_usernames={"user-alice": "alice_tg"},
            send_response=NotificationResponse(success=False, error=BOT_NOT_STARTED_ERROR, bot_id="neur_bot"),
        )
        result = run(TelegramTools(service).send_telegram_notification(ALICE, "hi"))

        assert not result.success
        assert result.error == BOT_NOT_STARTED_ERROR
        assert result.bot_id == "neur_bot"
        assert result.no_follow_up is False

    def test_service_exception_becomes_error(self):
        service = FakeNotificationService(stored_usernames={"user-alice": "alice_tg"},
                                          error=ConnectionError("telegram down"))
        result = run(TelegramTools(service).send_telegram_notification(ALICE, "hi"))
        assert result.error == "telegram down"

    def test_empty_exception_message_uses_default(self):
        service = FakeNotificationService(stored_usernames={"user-alice": "alice_tg"}, error=RuntimeError())
        result = run(TelegramTools(service).send_telegram_notification(ALICE, "hi"))
        assert result.error == "Failed to send notification"

    def test_not_configured(self):
        result = run(TelegramTools(None).send_telegram_notification(ALICE, "hi"))
        assert result.error == "Telegram service is not configured"


class TestVerifyTelegramSetup:
    def test_success(self):
        service = FakeNotificationService(verify_response=NotificationResponse(success=True))
        result = run(TelegramTools(service).verify_telegram_setup(ALICE, username="alice_tg"))

        assert result.success
        assert service.verified == [("alice_tg", "user-alice")]

    def test_failure_is_passed_through(self):
        service = FakeNotificationService(
            verify_response=NotificationResponse(success=False, error=MISSING_USERNAME_ERROR)
        )
        result = run(TelegramTools(service).verify_telegram_setup(ALICE))
        assert result.error == MISSING_USERNAME_ERROR

    def test_no_response(self):
        result = run(TelegramTools(FakeNotificationService()).verify_telegram_setup(ALICE))
        assert result.error == NO_RESPONSE_ERROR


class TestAnalyzeBundles:
    def test_success(self, bundle_analysis):
        service = FakeBundleService(analysis=bundle_analysis)
        result = run(BundleTools(service).analyze_bundles(ALICE, "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"))

        assert result.success
        assert result.data.total_bundles == 2
        assert service.calls == [("DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263", MIN_SLOT_TRANSACTIONS)]

    def test_min_slot_transactions(self):
        assert MIN_SLOT_TRANSACTIONS == 2

    def test_no_analysis(self):
        result = run(BundleTools(FakeBundleService()).analyze_bundles(ALICE, "mint"))
        assert result == BundleResult(success=False, error=ANALYSIS_FAILED_ERROR)

    def test_service_exception(self):
        service = FakeBundleService(error=TimeoutError("rpc timeout"))
        result = run(BundleTools(service).analyze_bundles(ALICE, "mint"))
        assert result.error == "rpc timeout"

    def test_camel_case_payload(self, bundle_analysis):
        assert bundle_analysis.largest_bundle.is_pumpfun_bundle is True
        assert bundle_analysis.suspicious_patterns.coordinated_buying[0].sol_spent == 4.5
        assert bundle_analysis.largest_bundle.time_window_seconds == 2.5
        assert bundle_analysis.total_sol_volume == pytest.approx(24.74)
        assert not bundle_analysis.suspicious_patterns.is_empty()


class TestToolRegistry:
    def test_default_registry(self):
        registry = create_default_registry()
        assert registry.names() == [
            "searchToken",
            "askForConfirmation",
            "analyzeBundles",
            "verifyTelegramSetup",
            "sendTelegramNotification",
        ]
        assert registry.get("searchToken").is_client_side
        assert not registry.get("analyzeBundles").is_client_side

    def test_describe_lists_every_tool(self):
        registry = create_default_registry()
        lines = registry.describe().splitlines()
        assert len(lines) == len(registry)
        assert lines[0].startswith("- searchToken: ")

    def test_subset_and_unknown(self):
        registry = create_default_registry()
        names = ["analyzeBundles", "launchRocket", "searchToken"]
        assert [tool.name for tool in registry.subset(names)] == ["analyzeBundles", "searchToken"]
        assert registry.unknown(names) == ["launchRocket"]
        assert "launchRocket" not in registry

    def test_register_replaces(self, caplog):
        registry = ToolRegistry()
        registry.register(ToolDefinition("echo", "Echo", "first", {}))
        with caplog.at_level("WARNING"):
            registry.register(ToolDefinition("echo", "Echo", "second", {}))
        assert registry.get("echo").description == "second"
        assert "already registered" in caplog.text

    def test_openai_format(self):
        tool = create_default_registry().get("analyzeBundles")
        definition = tool.to_openai()
        assert definition["type"] == "function"
        assert definition["function"]["name"] == "analyzeBundles"
        assert definition["function"]["parameters"]["required"] == ["mintAddress"]

    def test_parse_result(self, bundle_analysis_data):
        tool = create_default_registry().get("analyzeBundles")
        result = tool.parse_result({"success": True, "data": bundle_analysis_data})
        assert isinstance(result, BundleResult)
        assert tool.parse_result(result) is result


class TestToolExecutor:
    def test_executes_with_context(self, sent_ok):
        service = FakeNotificationService(stored_usernames={"user-alice": "alice_tg"}, send_response=sent_ok)
        executor = ToolExecutor(create_default_registry(notification_service=service))
        call = ToolCall(id="call_1", tool_name="sendTelegramNotification", input={"message": "hi"})

        result = run(executor.execute_tool(call, ALICE))

        assert not result.is_error
        assert result.tool_call_id == "call_1"
        assert result.output.success
        assert service.sent == [("alice_tg", "hi", "user-alice")]

    def test_context_is_per_call(self, sent_ok):
        service = FakeNotificationService(
            stored_usernames={"user-alice": "alice_tg", "user-bob": "bob_tg"}, send_response=sent_ok
        )
        executor = ToolExecutor(create_default_registry(notification_service=service))
        call = ToolCall(id="call_1", tool_name="sendTelegramNotification", input={"message": "hi"})

        run(executor.execute_tool(call, ALICE))
        run(executor.execute_tool(call, ToolContext(user_id="user-bob")))

        assert [sent[0] for sent in service.sent] == ["alice_tg", "bob_tg"]

    def test_camel_case_tool_input(self, bundle_analysis):
        service = FakeBundleService(analysis=bundle_analysis)
        executor = ToolExecutor(create_default_registry(bundle_service=service))
        call = ToolCall(id="call_2", tool_name="analyzeBundles", input={"mintAddress": "mint"})

        result = run(executor.execute_tool(call, ALICE))

        assert result.output.success
        assert service.calls == [("mint", 2)]

    def test_unknown_tool(self):
        executor = ToolExecutor(create_default_registry())
        result = run(executor.execute_tool(ToolCall("call_3", "launchRocket", {}), ALICE))
        assert result.is_error
        assert "not found" in result.error

    def test_client_side_tool(self):
        executor = ToolExecutor(create_default_registry())
        result = run(executor.execute_tool(ToolCall("call_4", "searchToken", {"query": "BONK"}), ALICE))
        assert result.error == "Tool 'searchToken' is handled by the client."

    def test_sync_tool_and_exception(self):
        def explode(context, **kwargs):
            raise ValueError("bad input")

        registry = ToolRegistry([
            ToolDefinition("whoami", "Who am I", "caller id", {}, execute=lambda context: context.user_id),
            ToolDefinition("explode", "Explode", "always fails", {}, execute=explode),
        ])
        executor = ToolExecutor(registry)

        assert run(executor.execute_tool(ToolCall("a", "whoami", {}), ALICE)).output == "user-alice"
        failed = run(executor.execute_tool(ToolCall("b", "explode", {}), ALICE))
        assert failed.error == "bad input"
        assert failed.output is None

    def test_openai_tools_for_selection(self):
        executor = ToolExecutor(create_default_registry())
        selected = executor.get_tools_for_openai(["searchToken", "analyzeBundles", "launchRocket"])
        assert [tool["function"]["name"] for tool in selected] == ["searchToken", "analyzeBundles"]
        assert len(executor.get_tools_for_openai()) == 5

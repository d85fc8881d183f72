"""Telegram notification tools.

Both tools talk to an injected ``NotificationService``; delivery itself
lives outside this package. Results follow the success/error convention
the chat front end renders.
"""

import logging
from typing import Optional, Protocol

from ..ai.tools import ToolContext, ToolDefinition
from .base import CamelModel, NOT_CONFIGURED_ERROR


logger = logging.getLogger(__name__)

MISSING_USERNAME_ERROR = "MISSING_USERNAME"
BOT_NOT_STARTED_ERROR = "BOT_NOT_STARTED"
NO_RESPONSE_ERROR = "No response from Telegram action"


class UsernameCheck(CamelModel):
    """Stored Telegram username for a user, if any."""
    username: Optional[str] = None


class NotificationResponse(CamelModel):
    """Reply from the notification service."""
    success: bool
    error: Optional[str] = None
    bot_id: Optional[str] = None


class TelegramResult(CamelModel):
    """Result returned to the assistant by the Telegram tools."""
    success: bool
    data: Optional[str] = None
    error: Optional[str] = None
    bot_id: Optional[str] = None
    no_follow_up: bool = False


class NotificationService(Protocol):
    """Messaging backend used by the Telegram tools."""

    async def check_username(self, user_id: Optional[str]) -> UsernameCheck:
        ...

    async def send_notification(self, username: str, text: str,
                                user_id: Optional[str]) -> Optional[NotificationResponse]:
        ...

    async def verify_setup(self, username: Optional[str],
                           user_id: Optional[str]) -> Optional[NotificationResponse]:
        ...


class TelegramTools:
    """Telegram tool implementations bound to a notification service."""

    def __init__(self, service: Optional[NotificationService]):
        self.service = service

    async def verify_telegram_setup(self, context: ToolContext,
                                    username: Optional[str] = None) -> TelegramResult:
        """Check that the user can receive notifications before an action relies on them."""
        if self.service is None:
            return TelegramResult(success=False, error=NOT_CONFIGURED_ERROR.format(service="Telegram"))

        try:
            response = await self.service.verify_setup(username, context.user_id)
            if response is None:
                return TelegramResult(success=False, error=NO_RESPONSE_ERROR)
            if not response.success:
                return TelegramResult(success=False, error=response.error, bot_id=response.bot_id)
            return TelegramResult(success=True, data="Telegram setup verified")
        except Exception as e:
            logger.error(f"Telegram setup verification failed: {e}")
            return TelegramResult(success=False, error=str(e) or "Verification failed")

    async def send_telegram_notification(self, context: ToolContext, message: str,
                                         username: Optional[str] = None) -> TelegramResult:
        """Send a message to the explicit username or the one stored for the caller."""
        if self.service is None:
            return TelegramResult(success=False, error=NOT_CONFIGURED_ERROR.format(service="Telegram"))

        try:
            username_check = await self.service.check_username(context.user_id)
            final_username = username or username_check.username
            if not final_username:
                return TelegramResult(success=False, error=MISSING_USERNAME_ERROR)

            response = await self.service.send_notification(
                username=final_username,
                text=message,
                user_id=context.user_id,
            )
            if response is None:
                return TelegramResult(success=False, error=NO_RESPONSE_ERROR)
            if not response.success:
                return TelegramResult(success=False, error=response.error, bot_id=response.bot_id)

            logger.info(f"Telegram notification sent to {final_username}")
            return TelegramResult(
                success=True,
                data="Notification sent successfully",
                no_follow_up=True,
                bot_id=response.bot_id,
            )
        except Exception as e:
            logger.error(f"Telegram notification failed: {e}")
            return TelegramResult(success=False, error=str(e) or "Failed to send notification")

    def definitions(self) -> list[ToolDefinition]:
        """Tool definitions for the registry."""
        from ..ui.renderers import render_send_telegram_notification, render_verify_telegram_setup

        return [
            ToolDefinition(
                name="verifyTelegramSetup",
                display_name="🔍 Verify Telegram Setup",
                description=(
                    "Verifies the users telegram setup before creating an action that sends "
                    "a telegram notification. Not required if this is not for an action"
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "username": {"type": "string"},
                    },
                },
                execute=self.verify_telegram_setup,
                render=render_verify_telegram_setup,
                result_model=TelegramResult,
                is_collapsible=True,
                is_expanded_by_default=True,
            ),
            ToolDefinition(
                name="sendTelegramNotification",
                display_name="📨 Send Telegram Notification",
                description=(
                    "Sends a Telegram message. Requires a Telegram username to be passed in "
                    "or saved in the database."
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "username": {"type": "string"},
                        "message": {"type": "string"},
                    },
                    "required": ["message"],
                },
                execute=self.send_telegram_notification,
                render=render_send_telegram_notification,
                result_model=TelegramResult,
                is_collapsible=True,
                is_expanded_by_default=True,
            ),
        ]

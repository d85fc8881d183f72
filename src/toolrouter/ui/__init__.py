"""Terminal rendering for tool results."""

from .renderers import (
    render_bundle_analysis,
    render_send_telegram_notification,
    render_telegram_response,
    render_tool_result,
    render_verify_telegram_setup,
)

__all__ = [
    "render_bundle_analysis",
    "render_send_telegram_notification",
    "render_telegram_response",
    "render_tool_result",
    "render_verify_telegram_setup",
]

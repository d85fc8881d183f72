"""Assistant tools and the default registry."""

from typing import Optional

from ..ai.tools import ToolRegistry
from .bundle import BundleAnalyticsService, BundleResult, BundleTools, MintBundleAnalysis
from .flow import flow_tool_definitions
from .telegram import (
    BOT_NOT_STARTED_ERROR,
    MISSING_USERNAME_ERROR,
    NotificationService,
    TelegramResult,
    TelegramTools,
)


def create_default_registry(notification_service: Optional[NotificationService] = None,
                            bundle_service: Optional[BundleAnalyticsService] = None) -> ToolRegistry:
    """Build the registry with every built-in tool.

    Tools whose service is not supplied are still registered so they can be
    listed and rendered; executing them returns an error result.
    """
    registry = ToolRegistry(flow_tool_definitions())
    for tool in BundleTools(bundle_service).definitions():
        registry.register(tool)
    for tool in TelegramTools(notification_service).definitions():
        registry.register(tool)
    return registry


__all__ = [
    "create_default_registry",
    "BundleAnalyticsService",
    "BundleResult",
    "BundleTools",
    "MintBundleAnalysis",
    "NotificationService",
    "TelegramResult",
    "TelegramTools",
    "MISSING_USERNAME_ERROR",
    "BOT_NOT_STARTED_ERROR",
]

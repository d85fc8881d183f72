"""Utility modules for toolrouter."""

from .console import ConsoleManager, StatusType, THEMES

__all__ = ["ConsoleManager", "StatusType", "THEMES"]

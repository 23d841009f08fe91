"""Shared models and utilities for the web search server."""

from shared.models import (
    HistoryEntry,
    PromptArgument,
    PromptDescriptor,
    PromptMessage,
    PromptResult,
    ReadResourceResult,
    ResourceContents,
    ResourceDescriptor,
    SearchReport,
    TextContent,
    ToolDescriptor,
    ToolResult,
)
from shared.config import Settings, get_settings
from shared.logging import get_logger, setup_logging

__all__ = [
    "HistoryEntry",
    "PromptArgument",
    "PromptDescriptor",
    "PromptMessage",
    "PromptResult",
    "ReadResourceResult",
    "ResourceContents",
    "ResourceDescriptor",
    "SearchReport",
    "TextContent",
    "ToolDescriptor",
    "ToolResult",
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
]

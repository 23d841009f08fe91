"""JSON documents served by the resource endpoints."""

import json
from typing import Any

from shared.models import HistoryEntry, format_timestamp, utc_now
from websearch_server.constants import (
    DEFAULT_RESULTS,
    MAX_RESULTS,
    SEARCH_TIMEOUT_SECONDS,
    SERVER_NAME,
    SERVER_VERSION,
    WEBSEARCH_TOOL,
)


def _dump(document: dict[str, Any]) -> str:
    return json.dumps(document, indent=2, ensure_ascii=False)


def render_history(entries: list[HistoryEntry]) -> str:
    """Render history entries, oldest first, as the search history document."""
    return _dump({
        "searchHistory": [entry.render() for entry in entries],
        "totalSearches": len(entries),
        "timestamp": format_timestamp(utc_now()),
    })


def render_config() -> str:
    """Render the fixed server configuration document."""
    return _dump({
        "serverName": SERVER_NAME,
        "version": SERVER_VERSION,
        "tools": [WEBSEARCH_TOOL],
        "capabilities": {
            "tools": True,
            "resources": True,
            "prompts": True,
        },
        "searchConfig": {
            "maxResults": MAX_RESULTS,
            "defaultResults": DEFAULT_RESULTS,
            "timeout": SEARCH_TIMEOUT_SECONDS,
        },
        "timestamp": format_timestamp(utc_now()),
    })

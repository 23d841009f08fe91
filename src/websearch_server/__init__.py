"""Web search server - capability catalog, dispatch routing and search.

Exposes one web search tool, the search history and server configuration
as resources, and research and fact-check prompts.
"""

from websearch_server.catalog import CapabilityCatalog, build_default_catalog
from websearch_server.errors import (
    CapabilityRequestError,
    MissingArgumentError,
    SearchProviderError,
    UnknownCapabilityError,
)
from websearch_server.router import DispatchRouter
from websearch_server.search import SearchProvider, format_report
from websearch_server.state import SearchHistory, SubscriptionRegistry

__all__ = [
    "CapabilityCatalog",
    "build_default_catalog",
    "CapabilityRequestError",
    "MissingArgumentError",
    "SearchProviderError",
    "UnknownCapabilityError",
    "DispatchRouter",
    "SearchProvider",
    "format_report",
    "SearchHistory",
    "SubscriptionRegistry",
]

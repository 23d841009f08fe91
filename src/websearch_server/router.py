"""Dispatch router for the web search server.

Lists capabilities from the catalog and routes invocations by name to
their handlers. Unknown names raise :class:`UnknownCapabilityError` for the
host to report as a request failure; everything else a caller can get
wrong comes back as a reported error.
"""

import time
from typing import Any, Awaitable, Callable, Optional

from shared.logging import get_logger
from shared.models import (
    PromptDescriptor,
    PromptResult,
    ReadResourceResult,
    ResourceContents,
    ResourceDescriptor,
    ToolDescriptor,
    ToolResult,
)
from websearch_server import prompts, resources
from websearch_server.catalog import CapabilityCatalog, build_default_catalog
from websearch_server.constants import (
    CONFIG_RESOURCE_URI,
    DEFAULT_RESULTS,
    FACT_CHECK_PROMPT,
    HISTORY_RESOURCE_URI,
    MAX_RESULTS,
    MIN_RESULTS,
    RESEARCH_PROMPT,
    WEBSEARCH_TOOL,
)
from websearch_server.errors import (
    MissingArgumentError,
    SearchProviderError,
    UnknownCapabilityError,
)
from websearch_server.search import SearchProvider
from websearch_server.state import SearchHistory, SubscriptionRegistry

logger = get_logger(__name__)


ToolHandler = Callable[[dict[str, Any]], Awaitable[ToolResult]]
PromptHandler = Callable[[dict[str, Any]], PromptResult]
ResourceReader = Callable[[], str]


def clamp_results(value: Optional[int]) -> int:
    """Number of result blocks to request: default when absent, else within bounds."""
    if value is None:
        return DEFAULT_RESULTS
    return max(MIN_RESULTS, min(int(value), MAX_RESULTS))


def _argument(arguments: dict[str, Any], name: str, default: str) -> str:
    value = arguments.get(name)
    return default if value is None else str(value)


class DispatchRouter:
    """
    Routes capability requests to their handlers.

    Responsibilities:
    - List tools, resources and prompts
    - Look up handlers by name in tables built at construction
    - Validate tool arguments
    - Record successful searches and resource subscriptions
    - Normalize provider failures into error envelopes
    """

    def __init__(
        self,
        catalog: Optional[CapabilityCatalog] = None,
        history: Optional[SearchHistory] = None,
        subscriptions: Optional[SubscriptionRegistry] = None,
        provider: Optional[SearchProvider] = None
    ) -> None:
        """
        Initialize the router with its collaborators.

        Raises:
            ValueError: If the handler tables and the catalog disagree
        """
        self.catalog = catalog or build_default_catalog()
        self.history = history if history is not None else SearchHistory()
        self.subscriptions = subscriptions if subscriptions is not None else SubscriptionRegistry()
        self.provider = provider or SearchProvider()

        self._tool_handlers: dict[str, ToolHandler] = {
            WEBSEARCH_TOOL: self._websearch,
        }
        self._prompt_handlers: dict[str, PromptHandler] = {
            RESEARCH_PROMPT: self._research_prompt,
            FACT_CHECK_PROMPT: self._fact_check_prompt,
        }
        self._resource_readers: dict[str, ResourceReader] = {
            HISTORY_RESOURCE_URI: self._read_history,
            CONFIG_RESOURCE_URI: resources.render_config,
        }

        self._check_tables()

    def _check_tables(self) -> None:
        """Every catalog entry needs exactly one handler, and vice versa."""
        tables = [
            ("tool", [t.name for t in self.catalog.list_tools()], self._tool_handlers),
            ("prompt", [p.name for p in self.catalog.list_prompts()], self._prompt_handlers),
            ("resource", [r.uri for r in self.catalog.list_resources()], self._resource_readers),
        ]
        for kind, declared, handlers in tables:
            missing = set(declared) - set(handlers)
            if missing:
                raise ValueError(f"No {kind} handler for: {', '.join(sorted(missing))}")
            orphaned = set(handlers) - set(declared)
            if orphaned:
                raise ValueError(f"Undeclared {kind} handler for: {', '.join(sorted(orphaned))}")

    async def close(self) -> None:
        await self.provider.close()

    # Listing

    def list_tools(self) -> list[ToolDescriptor]:
        return self.catalog.list_tools()

    def list_resources(self) -> list[ResourceDescriptor]:
        return self.catalog.list_resources()

    def list_prompts(self) -> list[PromptDescriptor]:
        return self.catalog.list_prompts()

    # Tools

    async def call_tool(
        self,
        name: str,
        arguments: Optional[dict[str, Any]] = None
    ) -> ToolResult:
        """
        Invoke a tool.

        Args:
            name: Tool name
            arguments: Tool arguments

        Returns:
            Result envelope; reported errors have ``is_error`` set

        Raises:
            UnknownCapabilityError: If no tool has this name
        """
        handler = self._tool_handlers.get(name)
        if handler is None:
            logger.warning("Unknown tool requested", tool=name)
            raise UnknownCapabilityError("tool", name)

        start_time = time.time()
        result = await handler(arguments or {})

        logger.info(
            "Tool call finished",
            tool=name,
            is_error=result.is_error,
            execution_time_ms=round((time.time() - start_time) * 1000, 1)
        )
        return result

    async def _websearch(self, arguments: dict[str, Any]) -> ToolResult:
        query = arguments.get("query")
        if query is None or (isinstance(query, str) and not query.strip()):
            return ToolResult.failure("Missing required 'query' parameter")

        provided = {key: value for key, value in arguments.items() if value is not None}
        is_valid, errors = self.catalog.validate_tool_input(WEBSEARCH_TOOL, provided)
        if not is_valid:
            return ToolResult.failure(f"Invalid arguments: {'; '.join(errors)}")

        num_results = clamp_results(provided.get("numResults"))
        logger.debug("Searching", query=query, num_results=num_results)

        try:
            report = await self.provider.search(query, num_results)
        except SearchProviderError as e:
            logger.error("Web search failed", query=query, error=str(e))
            return ToolResult.failure(f"Search failed: {e}")
        except Exception as e:
            logger.error("Web search failed", query=query, error=str(e), exc_info=True)
            return ToolResult.failure(f"Search failed: {e}")

        self.history.append(query)
        return ToolResult.success(report)

    # Prompts

    async def get_prompt(
        self,
        name: str,
        arguments: Optional[dict[str, Any]] = None
    ) -> PromptResult:
        """
        Render a prompt.

        Raises:
            UnknownCapabilityError: If no prompt has this name
            MissingArgumentError: If a required argument is missing or empty
        """
        handler = self._prompt_handlers.get(name)
        descriptor = self.catalog.get_prompt(name)
        if handler is None or descriptor is None:
            logger.warning("Unknown prompt requested", prompt=name)
            raise UnknownCapabilityError("prompt", name)

        logger.info("Getting prompt", prompt=name, arguments=sorted((arguments or {}).keys()))
        return handler(arguments or {})

    def _research_prompt(self, arguments: dict[str, Any]) -> PromptResult:
        topic = _argument(arguments, "topic", prompts.DEFAULT_TOPIC)
        depth = _argument(arguments, "depth", prompts.DEFAULT_DEPTH)
        return prompts.research_prompt(topic, depth)

    def _fact_check_prompt(self, arguments: dict[str, Any]) -> PromptResult:
        claim = _argument(arguments, "claim", "")
        if not claim.strip():
            raise MissingArgumentError("claim")
        return prompts.fact_check_prompt(claim)

    # Resources

    async def read_resource(self, uri: str) -> ReadResourceResult:
        """
        Read a resource.

        Raises:
            UnknownCapabilityError: If no resource has this URI
        """
        reader = self._resource_readers.get(uri)
        descriptor = self.catalog.get_resource(uri)
        if reader is None or descriptor is None:
            logger.warning("Unknown resource requested", uri=uri)
            raise UnknownCapabilityError("resource", uri)

        logger.info("Reading resource", uri=uri)
        return ReadResourceResult(contents=[
            ResourceContents(uri=uri, mime_type=descriptor.mime_type, text=reader())
        ])

    def _read_history(self) -> str:
        return resources.render_history(self.history.snapshot())

    async def subscribe(self, uri: str) -> None:
        # Any URI is accepted, known resource or not
        self.subscriptions.add(uri)
        logger.info("Client subscribed to resource", uri=uri)

    async def unsubscribe(self, uri: str) -> None:
        removed = self.subscriptions.remove(uri)
        logger.info("Client unsubscribed from resource", uri=uri, was_subscribed=removed)

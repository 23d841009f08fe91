"""Capability catalog for the web search server.

Holds the descriptors of every tool, resource and prompt the server
exposes. Descriptors are registered once at startup and only read
afterwards.
"""

from typing import Any, Optional

from shared.logging import get_logger
from shared.models import (
    PromptArgument,
    PromptDescriptor,
    ResourceDescriptor,
    ToolDescriptor,
)
from shared.schema import create_tool_schema, validate_schema
from websearch_server.constants import (
    CONFIG_RESOURCE_URI,
    DEFAULT_RESULTS,
    FACT_CHECK_PROMPT,
    HISTORY_RESOURCE_URI,
    MAX_RESULTS,
    RESEARCH_PROMPT,
    WEBSEARCH_TOOL,
)

logger = get_logger(__name__)


class CapabilityCatalog:
    """
    Registry of capability descriptors.

    Responsibilities:
    - Register tools, resources and prompts under unique keys
    - List each category in registration order
    - Look up descriptors by name or URI
    - Validate tool arguments against input schemas
    """

    def __init__(self) -> None:
        self._tools: dict[str, ToolDescriptor] = {}
        self._resources: dict[str, ResourceDescriptor] = {}
        self._prompts: dict[str, PromptDescriptor] = {}

    def register_tool(self, tool: ToolDescriptor) -> None:
        """
        Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool
        logger.debug("Tool registered", tool=tool.name)

    def register_resource(self, resource: ResourceDescriptor) -> None:
        """
        Register a resource.

        Raises:
            ValueError: If a resource with the same URI is already registered
        """
        if resource.uri in self._resources:
            raise ValueError(f"Resource '{resource.uri}' is already registered")
        self._resources[resource.uri] = resource
        logger.debug("Resource registered", uri=resource.uri)

    def register_prompt(self, prompt: PromptDescriptor) -> None:
        """
        Register a prompt.

        Raises:
            ValueError: If a prompt with the same name is already registered
        """
        if prompt.name in self._prompts:
            raise ValueError(f"Prompt '{prompt.name}' is already registered")
        self._prompts[prompt.name] = prompt
        logger.debug("Prompt registered", prompt=prompt.name)

    def list_tools(self) -> list[ToolDescriptor]:
        return list(self._tools.values())

    def list_resources(self) -> list[ResourceDescriptor]:
        return list(self._resources.values())

    def list_prompts(self) -> list[PromptDescriptor]:
        return list(self._prompts.values())

    def get_tool(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def get_resource(self, uri: str) -> Optional[ResourceDescriptor]:
        return self._resources.get(uri)

    def get_prompt(self, name: str) -> Optional[PromptDescriptor]:
        return self._prompts.get(name)

    def validate_tool_input(
        self,
        name: str,
        arguments: dict[str, Any]
    ) -> tuple[bool, list[str]]:
        """
        Validate tool arguments against the tool's input schema.

        Args:
            name: Tool name
            arguments: Arguments to validate

        Returns:
            Tuple of (is_valid, list of error messages)
        """
        tool = self.get_tool(name)
        if not tool:
            return False, [f"Tool '{name}' not found"]

        return validate_schema(arguments, tool.input_schema)


def websearch_tool() -> ToolDescriptor:
    return ToolDescriptor(
        name=WEBSEARCH_TOOL,
        description=(
            "Search the web for information on any topic. Returns relevant "
            "search results with titles, URLs, and snippets."
        ),
        input_schema=create_tool_schema([
            {
                "name": "query",
                "type": "string",
                "description": "The search query to look up on the web",
            },
            {
                "name": "numResults",
                "type": "integer",
                "description": (
                    f"Number of search results to return "
                    f"(default: {DEFAULT_RESULTS}, max: {MAX_RESULTS})"
                ),
                "required": False,
            },
        ]),
    )


def default_resources() -> list[ResourceDescriptor]:
    return [
        ResourceDescriptor(
            uri=HISTORY_RESOURCE_URI,
            name="Search History",
            description="Recent web search queries and results",
            mime_type="application/json",
        ),
        ResourceDescriptor(
            uri=CONFIG_RESOURCE_URI,
            name="Server Configuration",
            description="Current server configuration settings",
            mime_type="application/json",
        ),
    ]


def default_prompts() -> list[PromptDescriptor]:
    return [
        PromptDescriptor(
            name=RESEARCH_PROMPT,
            description="Generate a research prompt for investigating a topic using web search",
            arguments=(
                PromptArgument(name="topic", description="The topic to research", required=True),
                PromptArgument(
                    name="depth",
                    description="Research depth: 'quick', 'standard', or 'comprehensive'",
                    required=False,
                ),
            ),
        ),
        PromptDescriptor(
            name=FACT_CHECK_PROMPT,
            description="Generate a fact-checking prompt to verify claims using web search",
            arguments=(
                PromptArgument(
                    name="claim",
                    description="The claim or statement to fact-check",
                    required=True,
                ),
            ),
        ),
    ]


def build_default_catalog() -> CapabilityCatalog:
    """Build the catalog of everything this server exposes."""
    catalog = CapabilityCatalog()
    catalog.register_tool(websearch_tool())
    for resource in default_resources():
        catalog.register_resource(resource)
    for prompt in default_prompts():
        catalog.register_prompt(prompt)

    logger.info(
        "Capability catalog built",
        tools=len(catalog.list_tools()),
        resources=len(catalog.list_resources()),
        prompts=len(catalog.list_prompts()),
    )
    return catalog

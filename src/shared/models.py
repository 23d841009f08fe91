"""Core data models for the web search server.

Capability descriptors, result envelopes and history entries shared by the
dispatch layer and the host surface. Python attributes are snake_case;
the wire form uses camelCase aliases (``model_dump(by_alias=True)``).
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


def utc_now() -> datetime:
    """Current time in UTC."""
    return datetime.now(timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Render a UTC datetime as ISO-8601 with a ``Z`` suffix."""
    return moment.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


class WireModel(BaseModel):
    """Base for models serialized to the host protocol."""
    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class Descriptor(WireModel):
    """Immutable capability descriptor, defined once at startup."""
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class ToolDescriptor(Descriptor):
    """
    Definition of a tool a client can invoke.

    The input schema is a JSON Schema object describing the arguments.
    """
    name: str = Field(..., description="Unique tool name")
    description: str
    input_schema: dict[str, Any] = Field(
        default_factory=lambda: {"type": "object", "properties": {}},
        alias="inputSchema",
    )


class ResourceDescriptor(Descriptor):
    """Definition of a readable resource, keyed by URI."""
    uri: str = Field(..., description="Unique resource URI")
    name: str
    description: str
    mime_type: str = Field(default="application/json", alias="mimeType")


class PromptArgument(Descriptor):
    """A single named prompt argument."""
    name: str
    description: str
    required: bool = False


class PromptDescriptor(Descriptor):
    """Definition of a parameterized prompt."""
    name: str = Field(..., description="Unique prompt name")
    description: str
    arguments: tuple[PromptArgument, ...] = ()


class TextContent(WireModel):
    """A text content block."""
    type: Literal["text"] = "text"
    text: str


class ToolResult(WireModel):
    """
    Result envelope of a tool invocation.

    Reported errors travel inside a normal envelope with ``is_error`` set;
    they never tear down the request.
    """
    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(content=[TextContent(text=text)], is_error=False)

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(content=[TextContent(text=f"Error: {message}")], is_error=True)

    @property
    def text(self) -> str:
        """All text blocks joined together."""
        return "\n".join(block.text for block in self.content)


class ResourceContents(WireModel):
    """Text body of a resource read."""
    uri: str
    mime_type: str = Field(default="application/json", alias="mimeType")
    text: str


class ReadResourceResult(WireModel):
    """Result of reading a resource."""
    contents: list[ResourceContents] = Field(default_factory=list)


class Role(str, Enum):
    """Speaker of a prompt message."""
    USER = "user"
    ASSISTANT = "assistant"


class PromptMessage(WireModel):
    """A single message of a prompt script."""
    role: Role
    content: TextContent

    @classmethod
    def build(cls, role: Role, text: str) -> "PromptMessage":
        return cls(role=role, content=TextContent(text=text))



class PromptResult(WireModel):
    """Result of rendering a prompt."""
    description: str
    messages: list[PromptMessage] = Field(default_factory=list)


class HistoryEntry(BaseModel):
    """A past search query and when it was made."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime = Field(default_factory=utc_now)
    query: str

    def render(self) -> str:
        return f"[{format_timestamp(self.timestamp)}] {self.query}"


class SearchReport(BaseModel):
    """
    Normalized text report built from a provider response body.

    ``degraded`` is set when the body could not be parsed and the report
    carries a raw preview instead of results.
    """
    text: str
    degraded: bool = False
    result_count: int = 0

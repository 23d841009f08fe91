"""Tests for the capability catalog and input schemas."""

import pytest
from pydantic import ValidationError

from shared.models import PromptDescriptor, ResourceDescriptor, ToolDescriptor
from shared.schema import create_tool_schema, validate_schema


class TestDefaultCatalog:
    """Tests for the catalog the server exposes."""

    def setup_method(self):
        """Set up test fixtures."""
        from websearch_server.catalog import build_default_catalog

        self.catalog = build_default_catalog()

    def test_single_websearch_tool(self):
        """Test that exactly one tool named websearch is listed."""
        tools = self.catalog.list_tools()

        assert len(tools) == 1
        assert tools[0].name == "websearch"

    def test_websearch_requires_query_only(self):
        """Test that query is required and numResults optional."""
        schema = self.catalog.get_tool("websearch").input_schema

        assert schema["type"] == "object"
        assert schema["properties"]["query"]["type"] == "string"
        assert schema["properties"]["numResults"]["type"] == "integer"
        assert schema["required"] == ["query"]

    def test_resources(self):
        """Test the two resources and their URIs."""
        resources = self.catalog.list_resources()

        assert [r.uri for r in resources] == [
            "resource://search/history",
            "resource://config",
        ]
        assert all(r.mime_type == "application/json" for r in resources)

    def test_prompts(self):
        """Test the research and fact-check prompt arguments."""
        research = self.catalog.get_prompt("research")
        fact_check = self.catalog.get_prompt("fact-check")

        assert [p.name for p in self.catalog.list_prompts()] == ["research", "fact-check"]
        assert [(a.name, a.required) for a in research.arguments] == [
            ("topic", True),
            ("depth", False),
        ]
        assert [(a.name, a.required) for a in fact_check.arguments] == [("claim", True)]

    def test_wire_format_uses_camel_case(self):
        """Test descriptor serialization for the host protocol."""
        tool = self.catalog.get_tool("websearch").to_wire()
        resource = self.catalog.get_resource("resource://config").to_wire()
        prompt = self.catalog.get_prompt("fact-check").to_wire()

        assert set(tool) == {"name", "description", "inputSchema"}
        assert resource["mimeType"] == "application/json"
        assert prompt["arguments"] == [{
            "name": "claim",
            "description": "The claim or statement to fact-check",
            "required": True,
        }]

    def test_validate_tool_input(self):
        """Test argument validation against the websearch schema."""
        is_valid, errors = self.catalog.validate_tool_input(
            "websearch", {"query": "python", "numResults": 3}
        )
        assert is_valid
        assert errors == []

        is_valid, errors = self.catalog.validate_tool_input(
            "websearch", {"query": "python", "numResults": "three"}
        )
        assert not is_valid
        assert errors[0].startswith("numResults:")

    def test_validate_unknown_tool(self):
        """Test validating input for a tool that does not exist."""
        is_valid, errors = self.catalog.validate_tool_input("nope", {})

        assert not is_valid
        assert "not found" in errors[0]


class TestCatalogRegistration:
    """Tests for registering descriptors."""

    def test_duplicate_tool_raises(self):
        """Test that registering a tool twice raises an error."""
        from websearch_server.catalog import CapabilityCatalog

        catalog = CapabilityCatalog()
        tool = ToolDescriptor(name="echo", description="Echo input")
        catalog.register_tool(tool)

        with pytest.raises(ValueError, match="already registered"):
            catalog.register_tool(tool)

    def test_duplicate_resource_raises(self):
        """Test that registering a resource URI twice raises an error."""
        from websearch_server.catalog import CapabilityCatalog

        catalog = CapabilityCatalog()
        resource = ResourceDescriptor(uri="resource://a", name="A", description="A")
        catalog.register_resource(resource)

        with pytest.raises(ValueError, match="already registered"):
            catalog.register_resource(resource)

    def test_duplicate_prompt_raises(self):
        """Test that registering a prompt twice raises an error."""
        from websearch_server.catalog import CapabilityCatalog

        catalog = CapabilityCatalog()
        prompt = PromptDescriptor(name="summarize", description="Summarize")
        catalog.register_prompt(prompt)

        with pytest.raises(ValueError, match="already registered"):
            catalog.register_prompt(prompt)

    def test_descriptors_are_immutable(self):
        """Test that descriptors cannot be changed after construction."""
        tool = ToolDescriptor(name="echo", description="Echo input")

        with pytest.raises(ValidationError):
            tool.name = "other"


class TestSchema:
    """Tests for schema helpers."""

    def test_create_tool_schema_required_defaults_true(self):
        """Test that parameters are required unless marked otherwise."""
        schema = create_tool_schema([
            {"name": "text", "type": "str", "description": "Text"},
            {"name": "limit", "type": "int", "description": "Limit", "required": False},
        ])

        assert schema["properties"]["text"]["type"] == "string"
        assert schema["properties"]["limit"]["type"] == "integer"
        assert schema["required"] == ["text"]

    def test_validate_schema_reports_missing_field(self):
        """Test error messages for a missing required field."""
        schema = create_tool_schema([{"name": "text", "type": "string"}])

        is_valid, errors = validate_schema({}, schema)

        assert not is_valid
        assert "'text' is a required property" in errors[0]

    def test_empty_schema_accepts_anything(self):
        """Test that an empty schema never rejects input."""
        assert validate_schema({"anything": 1}, {}) == (True, [])

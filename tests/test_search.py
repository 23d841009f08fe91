"""Tests for the search provider adapter."""

import json

import httpx
import pytest

from websearch_server.errors import SearchProviderError
from websearch_server.search import SearchProvider, format_report


def _topics(count: int) -> list[dict]:
    return [
        {"Text": f"Topic {i}", "FirstURL": f"https://duckduckgo.com/Topic_{i}"}
        for i in range(1, count + 1)
    ]


def _provider(handler) -> SearchProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return SearchProvider(base_url="https://api.example.test/", client=client)


class TestFormatReport:
    """Tests for rendering provider responses."""

    def test_instant_answer_and_related_results(self):
        """Test that the instant answer counts towards the result limit."""
        body = json.dumps({
            "Abstract": "Python is a programming language.",
            "AbstractURL": "https://en.wikipedia.org/wiki/Python",
            "RelatedTopics": _topics(5),
        })

        report = format_report(body, "python", 3)

        assert report.text.startswith("# Web Search Results for: python\n\n")
        assert "## Instant Answer\nPython is a programming language.\n" in report.text
        assert "Source: https://en.wikipedia.org/wiki/Python" in report.text
        assert "### Result 3\nTopic 2\nURL: https://duckduckgo.com/Topic_2" in report.text
        assert "### Result 4" not in report.text
        assert report.result_count == 3
        assert not report.degraded

    def test_related_results_keep_provider_order(self):
        """Test numbering follows the order of related topics."""
        body = json.dumps({"RelatedTopics": _topics(3)})

        report = format_report(body, "q", 5)

        assert report.text.index("Topic 1") < report.text.index("Topic 2") < report.text.index("Topic 3")
        assert report.result_count == 3

    def test_limit_of_ten(self):
        """Test that at most the requested number of blocks are emitted."""
        body = json.dumps({"RelatedTopics": _topics(15)})

        report = format_report(body, "q", 10)

        assert "### Result 10" in report.text
        assert "### Result 11" not in report.text
        assert report.result_count == 10

    def test_entries_without_text_are_skipped(self):
        """Test that empty, grouped and malformed topics are ignored."""
        body = json.dumps({
            "Abstract": "",
            "RelatedTopics": [
                {"Text": "", "FirstURL": "https://example.com/empty"},
                {"Name": "Group", "Topics": _topics(2)},
                "not an object",
                {"Text": "Kept", "FirstURL": None},
            ],
        })

        report = format_report(body, "q", 5)

        assert "### Result 1\nKept\n" in report.text
        assert "URL:" not in report.text
        assert report.result_count == 1

    def test_no_results(self):
        """Test the notice when nothing could be extracted."""
        report = format_report(json.dumps({"Abstract": "", "RelatedTopics": []}), "q", 5)

        assert "No direct results found" in report.text
        assert "dedicated search API" in report.text
        assert report.result_count == 0
        assert not report.degraded

    def test_unparseable_body_degrades(self):
        """Test that a non-JSON body yields a bounded raw preview."""
        body = "<html>" + "x" * 1000

        report = format_report(body, "q", 5)

        assert report.degraded
        assert "results could not be parsed" in report.text
        assert report.text.endswith("Raw response preview: " + body[:500])
        assert "x" * 600 not in report.text

    def test_non_object_json_degrades(self):
        """Test that a JSON array is treated as unparseable."""
        report = format_report("[1, 2, 3]", "q", 5)

        assert report.degraded
        assert "Raw response preview: [1, 2, 3]" in report.text

    def test_deeply_nested_body_degrades(self):
        """Test that nesting too deep to decode yields a raw preview."""
        body = "[" * 100000

        report = format_report(body, "q", 5)

        assert report.degraded
        assert report.text.endswith("Raw response preview: " + "[" * 500)

    def test_oversized_integer_degrades(self):
        """Test that an integer literal too long to convert yields a raw preview."""
        body = '{"Abstract": "x", "n": ' + "1" * 5000 + "}"

        report = format_report(body, "q", 5)

        assert report.degraded
        assert "results could not be parsed" in report.text

    def test_text_fields_are_kept_verbatim(self):
        """Test that surrounding whitespace is preserved and blank text is skipped."""
        body = json.dumps({
            "Abstract": "  Padded abstract  ",
            "RelatedTopics": [
                {"Text": "   ", "FirstURL": "https://example.com/blank"},
                {"Text": "  Padded text  ", "FirstURL": " https://example.com/padded "},
            ],
        })

        report = format_report(body, "q", 5)

        assert "## Instant Answer\n  Padded abstract  \n" in report.text
        assert "### Result 2\n  Padded text  \nURL:  https://example.com/padded \n" in report.text
        assert "example.com/blank" not in report.text
        assert report.result_count == 2


class TestSearchProvider:
    """Tests for the outbound search call."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        """Test query encoding, format parameters and client header."""
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["request"] = request
            return httpx.Response(200, json={"RelatedTopics": _topics(1)})

        async with _provider(handler) as provider:
            report = await provider.search("rust & go?", 5)

        request = seen["request"]
        assert request.method == "GET"
        assert request.url.params["q"] == "rust & go?"
        assert request.url.params["format"] == "json"
        assert request.url.params["no_html"] == "1"
        assert "rust+%26+go%3F" in str(request.url) or "rust%20%26%20go%3F" in str(request.url)
        assert request.headers["User-Agent"] == "MCP-Server/1.0"
        assert "### Result 1\nTopic 1" in report

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self):
        """Test that a non-2xx response is a provider failure."""
        provider = _provider(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(SearchProviderError) as exc_info:
            await provider.search("q", 5)

        assert exc_info.value.status_code == 503
        assert "503" in str(exc_info.value)
        await provider.close()

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        """Test that a timeout surfaces as a provider failure."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("read timed out", request=request)

        provider = _provider(handler)

        with pytest.raises(SearchProviderError, match="timed out"):
            await provider.search("q", 5)
        await provider.close()

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        """Test that a connection failure surfaces as a provider failure."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        provider = _provider(handler)

        with pytest.raises(SearchProviderError, match="connection refused"):
            await provider.search("q", 5)
        await provider.close()

    @pytest.mark.asyncio
    async def test_malformed_body_is_not_an_error(self):
        """Test that an unparseable success body still returns a report."""
        provider = _provider(lambda request: httpx.Response(200, text="not json"))

        report = await provider.search("q", 5)

        assert "Raw response preview: not json" in report
        await provider.close()

    def test_default_timeouts(self):
        """Test the connect and read timeouts."""
        provider = SearchProvider()

        assert provider.timeout.connect == 30
        assert provider.timeout.read == 30

"""Search provider adapter.

Performs one outbound call to the DuckDuckGo Instant Answer API and renders
the JSON body as a text report. Transport failures raise
:class:`SearchProviderError`; a body that cannot be parsed still yields a
report carrying a raw preview.
"""

import json
from typing import Any, Optional

import httpx

from shared.logging import get_logger
from shared.models import SearchReport
from websearch_server.constants import (
    RAW_PREVIEW_CHARS,
    SEARCH_API_URL,
    SEARCH_TIMEOUT_SECONDS,
    USER_AGENT,
)
from websearch_server.errors import SearchProviderError

logger = get_logger(__name__)


class SearchProvider:
    """
    Client for the web search API.

    The provider is stateless apart from its pooled HTTP client and can be
    shared by concurrent requests. It makes a single attempt per search;
    the timeout is the only bound on a slow provider.
    """

    def __init__(
        self,
        base_url: str = SEARCH_API_URL,
        timeout: float = SEARCH_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None
    ) -> None:
        """
        Initialize the provider.

        Args:
            base_url: Search API endpoint
            timeout: Connect and read timeout in seconds
            client: Preconfigured HTTP client, created lazily when omitted
        """
        self.base_url = base_url
        self.timeout = httpx.Timeout(timeout, connect=timeout, read=timeout)
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "SearchProvider":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def search(self, query: str, num_results: int) -> str:
        """
        Search the web and render the results.

        Args:
            query: Search query
            num_results: Maximum number of result blocks in the report

        Returns:
            Report text

        Raises:
            SearchProviderError: If the request fails or returns a non-2xx status
        """
        body = await self.fetch(query)
        report = format_report(body, query, num_results)

        logger.info(
            "Search completed",
            query=query,
            results=report.result_count,
            degraded=report.degraded
        )
        return report.text

    async def fetch(self, query: str) -> str:
        """
        Fetch the raw response body for a query.

        Raises:
            SearchProviderError: On network failure, timeout or non-2xx status
        """
        client = self._get_client()
        params = {"q": query, "format": "json", "no_html": "1"}

        logger.debug("Requesting search results", url=self.base_url, query=query)
        try:
            response = await client.get(
                self.base_url,
                params=params,
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            raise SearchProviderError(f"Search request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise SearchProviderError(f"Search request failed: {e}") from e

        if not response.is_success:
            logger.warning("Search provider returned an error", status=response.status_code)
            raise SearchProviderError(
                f"Search request failed with status: {response.status_code}",
                status_code=response.status_code,
            )

        return response.text


def _decode_payload(body: str) -> Optional[dict[str, Any]]:
    """Decode a response body, or None when it is not a JSON object."""
    try:
        payload = json.loads(body)
    except (ValueError, RecursionError):
        # Oversized integer literals and deep nesting fail outside JSONDecodeError
        return None
    return payload if isinstance(payload, dict) else None


def _field(source: dict[str, Any], key: str) -> str:
    """String value of a field as given; anything else counts as empty."""
    value = source.get(key)
    return value if isinstance(value, str) else ""


def format_report(body: str, query: str, num_results: int) -> SearchReport:
    """
    Render a provider response body as a text report.

    The instant answer counts towards ``num_results``. A body that is not a
    JSON object yields a degraded report with a bounded raw preview.

    Args:
        body: Raw response body
        query: Original query, echoed in the header
        num_results: Maximum number of result blocks

    Returns:
        The rendered report
    """
    header = f"# Web Search Results for: {query}\n\n"

    payload = _decode_payload(body)
    if payload is None:
        logger.warning("Failed to parse search results", body_length=len(body))
        text = (
            header
            + "Search completed but results could not be parsed.\n"
            + f"Raw response preview: {body[:RAW_PREVIEW_CHARS]}"
        )
        return SearchReport(text=text, degraded=True)

    parts = [header]
    count = 0

    abstract = _field(payload, "Abstract")
    if abstract.strip() and count < num_results:
        parts.append("## Instant Answer\n")
        parts.append(f"{abstract}\n")
        source = _field(payload, "AbstractURL")
        if source.strip():
            parts.append(f"Source: {source}\n")
        parts.append("\n")
        count += 1

    topics = payload.get("RelatedTopics")
    if isinstance(topics, list):
        parts.append("## Related Results\n\n")
        for topic in topics:
            if count >= num_results:
                break
            if not isinstance(topic, dict):
                continue
            text = _field(topic, "Text")
            if not text.strip():
                continue
            parts.append(f"### Result {count + 1}\n")
            parts.append(f"{text}\n")
            url = _field(topic, "FirstURL")
            if url.strip():
                parts.append(f"URL: {url}\n")
            parts.append("\n")
            count += 1

    if count == 0:
        parts.append("No direct results found. Try refining your search query.\n")
        parts.append(
            "\nTip: For comprehensive web search, consider using a dedicated search API "
            "like Google Custom Search, Bing Search API, or Brave Search API.\n"
        )

    return SearchReport(text="".join(parts), result_count=count)

"""Fixed server identity and search defaults."""

SERVER_NAME = "websearch-mcp-server"
SERVER_VERSION = "1.0.0"
PROTOCOL_VERSION = "2024-11-05"

WEBSEARCH_TOOL = "websearch"

HISTORY_RESOURCE_URI = "resource://search/history"
CONFIG_RESOURCE_URI = "resource://config"

RESEARCH_PROMPT = "research"
FACT_CHECK_PROMPT = "fact-check"

# Search defaults
MIN_RESULTS = 1
MAX_RESULTS = 10
DEFAULT_RESULTS = 5
SEARCH_TIMEOUT_SECONDS = 30
HISTORY_CAPACITY = 100
RAW_PREVIEW_CHARS = 500

SEARCH_API_URL = "https://api.duckduckgo.com/"
USER_AGENT = "MCP-Server/1.0"

"""Message templates for the research and fact-check prompts."""

from shared.models import PromptMessage, PromptResult, Role

QUICK = "quick"
STANDARD = "standard"
COMPREHENSIVE = "comprehensive"
DEPTHS = (QUICK, STANDARD, COMPREHENSIVE)

DEFAULT_TOPIC = "general topic"
DEFAULT_DEPTH = STANDARD

_SYSTEM_BY_DEPTH = {
    QUICK: "Provide a brief overview with 2-3 key points from search results.",
    COMPREHENSIVE: (
        "Conduct thorough research with multiple searches, cross-reference sources, "
        "and provide detailed analysis with citations."
    ),
    STANDARD: "Search for relevant information and summarize key findings with sources.",
}

_TASK_BY_DEPTH = {
    QUICK: "I need a quick summary. Focus on the most important points.",
    COMPREHENSIVE: (
        "Please conduct comprehensive research including:\n"
        "1. Background and context\n"
        "2. Current state and recent developments\n"
        "3. Key perspectives and debates\n"
        "4. Reliable sources and citations\n"
        "5. Summary and key takeaways"
    ),
    STANDARD: "Please provide a balanced overview with key facts and sources.",
}


def normalize_depth(depth: str) -> str:
    """Map a requested depth onto a known branch; unknown values behave as standard."""
    return depth if depth in DEPTHS else STANDARD


def research_system_message(depth: str) -> str:
    return (
        "You are a research assistant with web search capabilities. "
        + _SYSTEM_BY_DEPTH[normalize_depth(depth)]
    )


def research_acknowledgement(topic: str, depth: str) -> str:
    return (
        f'I\'ll help you research "{topic}" using web search. '
        f"I'll conduct a {depth} investigation and provide you with comprehensive findings."
    )


def research_task_message(topic: str, depth: str) -> str:
    return (
        f"Please research the following topic: {topic}\n\n"
        + _TASK_BY_DEPTH[normalize_depth(depth)]
    )


def research_prompt(topic: str = DEFAULT_TOPIC, depth: str = DEFAULT_DEPTH) -> PromptResult:
    """
    Build the research script.

    Topic and depth are interpolated verbatim, including a depth outside the
    known set, which otherwise selects the standard branch.
    """
    return PromptResult(
        description=f"Research prompt for: {topic} (depth: {depth})",
        messages=[
            PromptMessage.build(Role.USER, research_system_message(depth)),
            PromptMessage.build(Role.ASSISTANT, research_acknowledgement(topic, depth)),
            PromptMessage.build(Role.USER, research_task_message(topic, depth)),
        ],
    )


def fact_check_prompt(claim: str) -> PromptResult:
    """Build the fact-check script for a non-empty claim."""
    return PromptResult(
        description="Fact-check prompt for claim verification",
        messages=[
            PromptMessage.build(
                Role.USER,
                "You are a fact-checker with web search capabilities. Your job is to verify "
                "claims by searching for reliable sources and evidence. Always cite your "
                "sources and rate the claim as: TRUE, FALSE, PARTIALLY TRUE, or UNVERIFIABLE.",
            ),
            PromptMessage.build(
                Role.ASSISTANT,
                "I'll fact-check the claim by searching for reliable sources and evidence. "
                "I'll provide a clear verdict with supporting sources.",
            ),
            PromptMessage.build(
                Role.USER,
                f'Please fact-check the following claim:\n\n"{claim}"\n\n'
                "Search for evidence both supporting and contradicting this claim, "
                "then provide your assessment.",
            ),
        ],
    )

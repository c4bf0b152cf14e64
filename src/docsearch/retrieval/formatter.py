"""Turn ranked search results into a readable answer with citations.

Nothing here calls a model: the answer is built only from retrieved excerpts,
so the same results always produce the same answer.
"""

import re

from ..entities.search_result import Answer, SearchResult, Source

NOT_FOUND_MESSAGE = (
    "I couldn't find anything about that in the documentation. "
    "Try rephrasing your question or browse the navigation menu to explore available topics."
)

MAX_SHOWN_RESULTS = 3
HIGH_RELEVANCE_SCORE = 0.7
PREVIEW_MAX_CHARS = 400
CODE_CONTEXT_CHARS = 150

_HOW_TO = re.compile(r"^how (to|do|can)", re.IGNORECASE)
_WHAT_IS = re.compile(r"^what (is|are)", re.IGNORECASE)
_WHY = re.compile(r"^why", re.IGNORECASE)
_CODE_BLOCK = re.compile(r"([\s\S]*?)(```[\s\S]*?```)([\s\S]*)")


def format_answer(query: str, results: list[SearchResult]) -> Answer:
    """Build the answer text and source list for ``query``.

    Args:
        query: The user's question; only used to pick the intro wording
        results: Ranked results, best first

    Returns:
        Answer with markdown text and deduplicated sources
    """
    if not results:
        return Answer(answer=NOT_FOUND_MESSAGE, sources=[])

    shown = results[:MAX_SHOWN_RESULTS]
    parts = [_intro(query, len(results), len(shown))]

    for index, result in enumerate(shown):
        if index > 0:
            parts.append("\n\n---\n\n")
        parts.append(_render_result(result))

    if len(results) > MAX_SHOWN_RESULTS:
        more = len(results) - MAX_SHOWN_RESULTS
        plural = "s" if more > 1 else ""
        parts.append(
            f"\n\n---\n\n💡 **Found {more} more related section{plural}** "
            f"— check the sources below for more details."
        )
    elif len(results) == 1:
        parts.append("\n\n*Have a follow-up question? Just ask!*")

    return Answer(answer="".join(parts), sources=collect_sources(results))


def _intro(query: str, total: int, shown: int) -> str:
    query = query.strip()
    if _HOW_TO.match(query):
        return "Here's how you can do that:\n\n"
    if _WHAT_IS.match(query):
        return "Let me explain:\n\n"
    if _WHY.match(query):
        return "Here's what the docs say about that:\n\n"
    if total == 1:
        return "I found this relevant section:\n\n"
    return f"I found {shown} relevant sections:\n\n"


def _render_result(result: SearchResult) -> str:
    metadata = result.chunk.metadata
    heading = metadata.heading or metadata.title

    rendered = (
        f"**{heading}**\n\n"
        f"{format_preview(result.chunk.text.strip())}\n\n"
        f"→ [View full section]({metadata.deep_link})"
    )
    if result.score > HIGH_RELEVANCE_SCORE:
        rendered += " *(highly relevant)*"
    return rendered


def format_preview(text: str) -> str:
    """Shorten chunk text for display.

    Short text is returned as-is. Long text containing a fenced code block
    keeps the first block whole and trims the prose around it; other long
    text is cut at a fixed length.
    """
    if len(text) <= PREVIEW_MAX_CHARS:
        return text

    match = _CODE_BLOCK.match(text) if "```" in text else None
    if match:
        before, code, after = match.groups()
        before = before.strip()[:CODE_CONTEXT_CHARS]
        after = after.strip()[:CODE_CONTEXT_CHARS]
        return f"{before}\n\n{code}\n\n{after}..."

    return text[:PREVIEW_MAX_CHARS] + "..."


def collect_sources(results: list[SearchResult]) -> list[Source]:
    """Citations for all results, deduplicated by link (first occurrence wins)."""
    sources: dict[str, Source] = {}
    for result in results:
        metadata = result.chunk.metadata
        url = metadata.deep_link
        if url in sources:
            continue
        title = f"{metadata.title} → {metadata.heading}" if metadata.heading else metadata.title
        sources[url] = Source(title=title, url=url)
    return list(sources.values())

"""Query-time retrieval: similarity search, answer formatting, sessions."""

from .formatter import NOT_FOUND_MESSAGE, collect_sources, format_answer, format_preview
from .search import VectorSearch
from .session import SearchSession

__all__ = [
    "VectorSearch",
    "SearchSession",
    "format_answer",
    "format_preview",
    "collect_sources",
    "NOT_FOUND_MESSAGE",
]

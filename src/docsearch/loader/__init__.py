"""Document loaders."""

from .markdown import MarkdownLoader, extract_title, page_url, split_front_matter

__all__ = ["MarkdownLoader", "extract_title", "page_url", "split_front_matter"]

"""Markdown directory loader.

Reads a documentation tree into Document records: front matter is split
off, a display title is chosen and the page URL is derived from the path.
Rendering markdown to HTML is not done here.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from ..entities.document import Document

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(.*?)\r?\n---[ \t]*(?:\r?\n|\Z)", re.DOTALL)
_FIRST_H1 = re.compile(r"^#\s+(.+)$", re.MULTILINE)


class MarkdownLoader:
    """Load ``*.md`` files as documents.

    Example:
        >>> loader = MarkdownLoader()
        >>> docs = loader.load_directory("docs/")
    """

    def __init__(self, pattern: str = "*.md", encoding: str = "utf-8"):
        self.pattern = pattern
        self.encoding = encoding

    def load_directory(self, input_dir: str | Path) -> list[Document]:
        """Load every matching file under ``input_dir``, sorted by relative path.

        Raises:
            FileNotFoundError: If the directory does not exist
            NotADirectoryError: If the path is not a directory
        """
        root = Path(input_dir)
        if not root.exists():
            raise FileNotFoundError(f"Input directory does not exist: {root}")
        if not root.is_dir():
            raise NotADirectoryError(f"Not a directory: {root}")

        paths = sorted(
            (p for p in root.rglob(self.pattern) if p.is_file()),
            key=lambda p: p.relative_to(root).as_posix(),
        )
        documents = [self.load_file(path, root) for path in paths]

        logger.info(f"Loaded {len(documents)} markdown documents from {root}")
        return documents

    def load_file(self, path: str | Path, root: str | Path) -> Document:
        """Load one file; ``root`` determines its relative path and URL."""
        path = Path(path)
        relative_path = path.relative_to(root).as_posix()

        raw = path.read_text(encoding=self.encoding)
        metadata, content = split_front_matter(raw)
        title = metadata.get("title") or extract_title(content, relative_path)

        return Document(
            relative_path=relative_path,
            content=content,
            title=str(title),
            url=page_url(relative_path),
            metadata=metadata,
        )


def split_front_matter(text: str) -> tuple[dict[str, Any], str]:
    """Separate a leading YAML front matter block from the markdown body.

    Front matter that is not a YAML mapping is treated as absent.
    """
    match = _FRONT_MATTER.match(text)
    if not match:
        return {}, text

    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as e:
        logger.warning(f"Ignoring invalid front matter: {e}")
        return {}, text

    if not isinstance(data, dict):
        return {}, text
    return data, text[match.end():]


def extract_title(content: str, relative_path: str) -> str:
    """First level-1 heading, else a title made from the file name."""
    match = _FIRST_H1.search(content)
    if match:
        return match.group(1).strip()

    stem = Path(relative_path).stem.replace("-", " ")
    return re.sub(r"\b\w", lambda m: m.group(0).upper(), stem)


def page_url(relative_path: str) -> str:
    """URL of the rendered page: ``guide/setup.md`` → ``/guide/setup.html``.

    The root ``index.md`` maps to ``/``.
    """
    url = re.sub(r"\.md$", ".html", relative_path.replace("\\", "/"))
    return "/" if url == "index.html" else f"/{url}"

"""Heading-aware line chunker for markdown documents.

Documents are scanned line by line. Level 1-3 headings start a new chunk,
fenced code blocks are kept whole, and a chunk that reaches the size limit
is closed and the next one is seeded with a few trailing lines of overlap.
"""

import math
import re

from loguru import logger

from ..entities.chunk import ChunkMetadata, TextChunk
from ..entities.document import Document
from .base import BaseChunker

FENCE = "```"
HEADING_PATTERN = re.compile(r"^(#{1,3})\s+(.+)$")

# (1-based line number, line text)
_Line = tuple[int, str]


def estimate_tokens(text: str) -> int:
    """Approximate token count: one token per four characters, rounded up."""
    return math.ceil(len(text) / 4)


def slugify(text: str) -> str:
    """Convert heading text to the anchor id used by the rendered page.

    Mirrors markdown-it-anchor: lowercase, whitespace and ``+`` become hyphens,
    other non-word characters are dropped, and hyphen runs are collapsed and
    trimmed.

    Examples:
        >>> slugify("Getting Started!")
        'getting-started'
        >>> slugify("  C++ / Rust  ")
        'c-rust'
    """
    slug = text.lower().strip()
    slug = re.sub(r"[\s+]", "-", slug)
    slug = re.sub(r"[^\w\-]+", "", slug, flags=re.ASCII)
    slug = re.sub(r"-{2,}", "-", slug)
    return slug.strip("-")


class HeadingChunker(BaseChunker):
    """Splits markdown by headings while respecting a token budget.

    Attributes:
        max_chunk_size: Token estimate at which an open chunk is closed
        chunk_overlap: Maximum tokens of trailing lines repeated in the next chunk
    """

    def __init__(self, max_chunk_size: int = 500, chunk_overlap: int = 50):
        """Initialize the chunker.

        Args:
            max_chunk_size: Maximum approximate tokens per chunk
            chunk_overlap: Approximate tokens of overlap between split chunks

        Raises:
            ValueError: If max_chunk_size <= 0 or overlap not in [0, max_chunk_size)
        """
        if max_chunk_size <= 0:
            raise ValueError("max_chunk_size must be positive")
        if chunk_overlap < 0 or chunk_overlap >= max_chunk_size:
            raise ValueError("chunk_overlap must be in [0, max_chunk_size)")

        self.max_chunk_size = max_chunk_size
        self.chunk_overlap = chunk_overlap

        logger.debug(
            f"Initialized HeadingChunker: size={max_chunk_size}, overlap={chunk_overlap}"
        )

    def chunk(self, document: Document, content_hash: str | None = None) -> list[TextChunk]:
        lines = document.content.replace("\r\n", "\n").split("\n")

        chunks: list[TextChunk] = []
        current: list[_Line] = []
        heading: str | None = None
        in_code_block = False
        code_block: list[_Line] = []

        for line_no, line in enumerate(lines, start=1):
            if line.strip().startswith(FENCE):
                if not in_code_block:
                    in_code_block = True
                    code_block = [(line_no, line)]
                else:
                    in_code_block = False
                    code_block.append((line_no, line))
                    current.extend(code_block)
                    code_block = []
                continue

            if in_code_block:
                code_block.append((line_no, line))
                continue

            match = HEADING_PATTERN.match(line)
            if match:
                if current:
                    chunks.append(self._make_chunk(current, document, heading, content_hash))
                heading = match.group(2)
                current = [(line_no, line)]
                continue

            current.append((line_no, line))
            if estimate_tokens(self._join(current)) >= self.max_chunk_size:
                chunks.append(self._make_chunk(current, document, heading, content_hash))
                current = self._overlap_lines(current)

        if in_code_block:
            # Unterminated fence: keep what we have
            current.extend(code_block)

        if current:
            chunks.append(self._make_chunk(current, document, heading, content_hash))

        result = [c for c in chunks if c.text.strip()]
        logger.debug(f"Split {document.relative_path} into {len(result)} chunks")
        return result

    @staticmethod
    def _join(lines: list[_Line]) -> str:
        return "\n".join(text for _, text in lines)

    def _overlap_lines(self, lines: list[_Line]) -> list[_Line]:
        """Trailing whole lines whose token estimates sum to at most chunk_overlap."""
        result: list[_Line] = []
        token_count = 0

        for entry in reversed(lines):
            line_tokens = estimate_tokens(entry[1])
            if token_count + line_tokens > self.chunk_overlap:
                break
            result.insert(0, entry)
            token_count += line_tokens

        return result

    def _make_chunk(
        self,
        lines: list[_Line],
        document: Document,
        heading: str | None,
        content_hash: str | None,
    ) -> TextChunk:
        numbered = [line_no for line_no, text in lines if text.strip()]
        return TextChunk(
            text=self._join(lines).strip(),
            metadata=ChunkMetadata(
                source_file=document.relative_path,
                title=document.title or "Untitled",
                heading=heading,
                heading_id=slugify(heading) if heading else None,
                url=document.url,
                start_line=numbered[0] if numbered else None,
                end_line=numbered[-1] if numbered else None,
                content_hash=content_hash,
            ),
        )

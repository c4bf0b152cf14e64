"""Chunker module: splits documents into bounded, overlap-aware chunks."""

from .base import BaseChunker
from .heading import HeadingChunker, estimate_tokens, slugify

__all__ = ["BaseChunker", "HeadingChunker", "estimate_tokens", "slugify"]

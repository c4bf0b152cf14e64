"""Retrieval result entities."""

from pydantic import BaseModel, Field

from .chunk import DocumentChunk


class SearchResult(BaseModel):
    """Represents a search result with relevance score.

    Attributes:
        chunk: The retrieved chunk
        score: Cosine similarity in range [-1, 1]
    """

    chunk: DocumentChunk
    score: float = Field(..., ge=-1.0, le=1.0)

    model_config = {
        "frozen": True,  # Results are immutable
    }


class Source(BaseModel):
    """A citation shown under an answer."""

    title: str
    url: str


class Answer(BaseModel):
    """Formatted response to a query: excerpt text plus citations."""

    answer: str
    sources: list[Source] = Field(default_factory=list)

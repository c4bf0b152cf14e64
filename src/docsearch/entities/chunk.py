"""Chunk entities: metadata, transient text chunks and embedded chunks.

The persisted artifact uses camelCase keys (``sourceFile``, ``headingId``);
Python code uses the snake_case attribute names.
"""

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ChunkMetadata(BaseModel):
    """Fixed set of metadata carried by every chunk.

    Unknown keys found in an artifact are ignored rather than passed through.
    ``fileHash`` (written by older builds) is accepted as ``contentHash``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    source_file: str
    title: str
    heading: str | None = None
    heading_id: str | None = None
    url: str
    start_line: int | None = None
    end_line: int | None = None
    content_hash: str | None = Field(
        default=None,
        validation_alias=AliasChoices("contentHash", "fileHash", "content_hash"),
        serialization_alias="contentHash",
    )

    @property
    def deep_link(self) -> str:
        """URL of the chunk's section, anchored at its heading when present."""
        if self.heading_id:
            return f"{self.url}#{self.heading_id}"
        return self.url


class TextChunk(BaseModel):
    """A chunk of text produced by the chunker, before embedding."""

    text: str
    metadata: ChunkMetadata


class DocumentChunk(BaseModel):
    """An embedded chunk as stored in the vector database.

    Attributes:
        id: 16 hex chars, deterministic over (source file, index, text prefix)
        text: Chunk text
        embedding: Vector of length ``VectorDatabase.dimension``
        metadata: Chunk metadata
    """

    id: str = Field(..., min_length=1)
    text: str
    embedding: list[float]
    metadata: ChunkMetadata

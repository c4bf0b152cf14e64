"""VectorDatabase entity: the single persisted artifact."""

from pydantic import BaseModel, Field, model_validator

from .chunk import DocumentChunk

VECTOR_DB_VERSION = "1.0"


class VectorDatabase(BaseModel):
    """All embedded chunks of a project plus the model that produced them.

    Invariant: every chunk's embedding has exactly ``dimension`` entries.
    """

    version: str = VECTOR_DB_VERSION
    model: str
    dimension: int = Field(..., gt=0)
    chunks: list[DocumentChunk] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_dimensions(self) -> "VectorDatabase":
        for chunk in self.chunks:
            if len(chunk.embedding) != self.dimension:
                raise ValueError(
                    f"Chunk {chunk.id} has embedding of length {len(chunk.embedding)}, "
                    f"expected {self.dimension}"
                )
        return self

    def source_files(self) -> list[str]:
        """Distinct source files in chunk order."""
        return list(dict.fromkeys(chunk.metadata.source_file for chunk in self.chunks))

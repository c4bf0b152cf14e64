"""Document entity representing one source file of the corpus."""

from typing import Any

from pydantic import BaseModel, Field


class Document(BaseModel):
    """
    A processed source document, as handed over by the markdown collaborator.

    Documents are read fresh on every build and never mutated.

    Attributes:
        relative_path: Identifier of the document (path relative to the input dir)
        content: Full raw text (front matter already stripped)
        title: Display title
        url: Target URL of the rendered page
        metadata: Extra front matter; never persisted into the vector database
    """

    relative_path: str = Field(..., min_length=1)
    content: str
    title: str = "Untitled"
    url: str
    metadata: dict[str, Any] = Field(default_factory=dict)

    model_config = {
        "frozen": True,
    }

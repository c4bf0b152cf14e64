"""Tests for the error hierarchy."""

from docsearch.errors import (
    ConfigurationError,
    DimensionMismatchError,
    DocSearchError,
    EmbeddingError,
    ModelLoadError,
    VectorDatabaseError,
)


class TestDocSearchError:

    def test_str_includes_details_and_cause(self):
        error = DocSearchError("Failed", details={"path": "x"}, original_error=OSError("disk"))

        text = str(error)

        assert text.startswith("Failed")
        assert "Details: {'path': 'x'}" in text
        assert "Caused by: OSError: disk" in text

    def test_to_dict(self):
        error = VectorDatabaseError("Bad artifact")

        assert error.to_dict() == {
            "error_type": "VectorDatabaseError",
            "message": "Bad artifact",
            "details": {},
            "original_error": None,
        }

    def test_hierarchy(self):
        assert issubclass(ConfigurationError, DocSearchError)
        assert issubclass(ModelLoadError, EmbeddingError)
        assert issubclass(EmbeddingError, DocSearchError)
        assert issubclass(DimensionMismatchError, ValueError)

    def test_default_messages(self):
        assert ModelLoadError().message == "Failed to load embedding model"
        assert ConfigurationError().message == "Configuration error"


class TestDimensionMismatchError:

    def test_message_and_fields(self):
        error = DimensionMismatchError(384, 768, context="Query vector")

        assert error.message == "Query vector: Vector dimension mismatch: 384 != 768"
        assert error.expected == 384
        assert error.actual == 768
        assert error.details == {"expected": 384, "actual": 768}

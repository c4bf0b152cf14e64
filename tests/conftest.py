"""Pytest configuration and global fixtures for docsearch tests."""

import tempfile
from pathlib import Path

import pytest

from docsearch.chunker.heading import HeadingChunker
from docsearch.embedder.embedder import Embedder
from docsearch.entities.document import Document
from tests.utils.builders import make_document
from tests.utils.fake_models import CountingEmbeddingModel


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def counting_model():
    return CountingEmbeddingModel(dimension=8)


@pytest.fixture
def embedder(counting_model):
    return Embedder(counting_model)


@pytest.fixture
def heading_chunker():
    return HeadingChunker(max_chunk_size=500, chunk_overlap=50)


@pytest.fixture
def sample_documents() -> list[Document]:
    return [
        make_document(
            "guide/install.md",
            "# Install\n\nRun pip install docsearch.\n\n## Requirements\n\nPython 3.10 or newer.",
            title="Install",
        ),
        make_document(
            "guide/usage.md",
            "# Usage\n\nBuild the database, then ask questions.\n\n```bash\nmain.py build docs/\n```",
            title="Usage",
        ),
        make_document("faq.md", "# FAQ\n\nAnswers to common questions.", title="FAQ"),
    ]


# ==================== Pytest Configuration ====================

def pytest_configure(config):
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")


def pytest_collection_modifyitems(config, items):
    for item in items:
        rel_path = Path(item.fspath).relative_to(Path(__file__).parent)
        if "unit" in rel_path.parts:
            item.add_marker(pytest.mark.unit)
        elif "integration" in rel_path.parts:
            item.add_marker(pytest.mark.integration)

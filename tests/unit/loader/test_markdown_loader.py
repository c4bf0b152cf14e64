"""Tests for the markdown directory loader."""

import pytest

from docsearch.loader.markdown import MarkdownLoader, extract_title, page_url, split_front_matter


@pytest.fixture
def docs_dir(temp_dir):
    (temp_dir / "guide").mkdir()
    (temp_dir / "index.md").write_text("# Welcome\n\nStart here.")
    (temp_dir / "guide" / "getting-started.md").write_text(
        "---\ntitle: Quick Start\norder: 2\n---\n# Getting Started\n\nInstall first."
    )
    (temp_dir / "guide" / "faq-and-tips.md").write_text("No heading here.")
    (temp_dir / "notes.txt").write_text("ignored")
    return temp_dir


class TestMarkdownLoader:

    def test_loads_sorted_markdown_files(self, docs_dir):
        docs = MarkdownLoader().load_directory(docs_dir)

        assert [d.relative_path for d in docs] == [
            "guide/faq-and-tips.md",
            "guide/getting-started.md",
            "index.md",
        ]

    def test_front_matter(self, docs_dir):
        docs = {d.relative_path: d for d in MarkdownLoader().load_directory(docs_dir)}
        doc = docs["guide/getting-started.md"]

        assert doc.title == "Quick Start"
        assert doc.metadata == {"title": "Quick Start", "order": 2}
        assert doc.content == "# Getting Started\n\nInstall first."
        assert doc.url == "/guide/getting-started.html"

    def test_title_fallbacks(self, docs_dir):
        docs = {d.relative_path: d for d in MarkdownLoader().load_directory(docs_dir)}

        assert docs["index.md"].title == "Welcome"
        assert docs["index.md"].url == "/"
        assert docs["guide/faq-and-tips.md"].title == "Faq And Tips"

    def test_missing_directory(self, temp_dir):
        with pytest.raises(FileNotFoundError):
            MarkdownLoader().load_directory(temp_dir / "nope")

    def test_not_a_directory(self, temp_dir):
        path = temp_dir / "file.md"
        path.write_text("# x")
        with pytest.raises(NotADirectoryError):
            MarkdownLoader().load_directory(path)

    def test_empty_directory(self, temp_dir):
        assert MarkdownLoader().load_directory(temp_dir) == []


class TestHelpers:

    def test_split_front_matter_absent(self):
        assert split_front_matter("# Title\nBody") == ({}, "# Title\nBody")

    def test_split_front_matter_not_a_mapping(self):
        text = "---\n- a\n- b\n---\nBody"
        assert split_front_matter(text) == ({}, text)

    def test_split_front_matter_invalid_yaml(self):
        text = "---\ntitle: [unclosed\n---\nBody"
        assert split_front_matter(text) == ({}, text)

    def test_extract_title_uses_first_h1_only(self):
        assert extract_title("## Sub\n# Main\n# Second", "x.md") == "Main"
        assert extract_title("## Only sub", "api-reference.md") == "Api Reference"

    @pytest.mark.parametrize("path,url", [
        ("index.md", "/"),
        ("guide/index.md", "/guide/index.html"),
        ("setup.md", "/setup.html"),
        ("a/b/c.md", "/a/b/c.html"),
    ])
    def test_page_url(self, path, url):
        assert page_url(path) == url

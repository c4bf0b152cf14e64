"""Tests for the content-hash cache index."""

from docsearch.cache import CacheIndex, content_hash
from tests.utils.builders import DocumentChunkBuilder, make_database


def chunk(source: str, index: int, content_hash_: str | None):
    builder = DocumentChunkBuilder().with_id(f"{source}-{index}").with_source(source)
    if content_hash_ is not None:
        builder = builder.with_content_hash(content_hash_)
    return builder.build()


class TestCacheIndex:

    def test_empty_without_database(self):
        index = CacheIndex.from_database(None)
        assert len(index) == 0
        assert index.lookup("a.md", "anything") is None

    def test_groups_by_source_in_order(self):
        db = make_database([
            chunk("a.md", 0, "h-a"),
            chunk("b.md", 0, "h-b"),
            chunk("a.md", 1, "h-a"),
        ])

        index = CacheIndex.from_database(db)

        assert len(index) == 2
        assert "a.md" in index and "b.md" in index
        assert [c.id for c in index.get("a.md").chunks] == ["a.md-0", "a.md-1"]
        assert index.get("a.md").content_hash == "h-a"

    def test_lookup_hit_and_miss(self):
        index = CacheIndex.from_database(make_database([chunk("a.md", 0, "h-a")]))

        hit = index.lookup("a.md", "h-a")

        assert [c.id for c in hit] == ["a.md-0"]
        assert index.lookup("a.md", "changed") is None
        assert index.lookup("new.md", "h-a") is None

    def test_lookup_returns_a_copy(self):
        index = CacheIndex.from_database(make_database([chunk("a.md", 0, "h-a")]))

        index.lookup("a.md", "h-a").clear()

        assert len(index.lookup("a.md", "h-a")) == 1

    def test_inconsistent_hashes_never_hit(self):
        db = make_database([chunk("a.md", 0, "h1"), chunk("a.md", 1, "h2")])

        index = CacheIndex.from_database(db)

        assert index.get("a.md").content_hash is None
        assert index.lookup("a.md", "h1") is None
        assert index.lookup("a.md", "h2") is None

    def test_missing_hash_never_hits(self):
        index = CacheIndex.from_database(make_database([chunk("a.md", 0, None)]))

        entry = index.get("a.md")

        assert entry.content_hash is None
        assert not entry.matches("")

    def test_entries(self):
        db = make_database([chunk("a.md", 0, "x"), chunk("b.md", 0, "y")])
        sources = [e.source_file for e in CacheIndex.from_database(db).entries()]
        assert sources == ["a.md", "b.md"]

    def test_content_hash_exported(self):
        assert content_hash("text") == content_hash("text")
        assert content_hash("text") != content_hash("text ")

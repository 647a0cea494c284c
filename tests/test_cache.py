"""Tests for the persistent navigation cache and cached document reads."""

from __future__ import annotations

from pathlib import Path

import pytest
from mkautonav.cache import CACHE_FILE, CacheEntry, DocumentInfo, NavCache
from mkautonav.documents import DocumentReader
from mkautonav.models import FrontmatterError, TimesInfo
from mkautonav.yaml_utils import ParsedDocument
from pytest_mock import MockerFixture


class TestNavCache:
    """Test suite for NavCache persistence."""

    def test_missing_file_starts_cold(self, tmp_path: Path) -> None:
        """Test that a missing cache file yields an empty cache."""
        cache = NavCache.load(tmp_path / "nowhere")

        assert cache.entries == {}

    def test_corrupt_file_starts_cold(self, mocker: MockerFixture, tmp_path: Path) -> None:
        """Test that unreadable cache content is ignored with a notice."""
        mock_console = mocker.patch("mkautonav.cache.console")
        (tmp_path / CACHE_FILE).write_text("{not json", encoding="utf-8")

        cache = NavCache.load(tmp_path)

        assert cache.entries == {}
        mock_console.print.assert_called_once()

    def test_non_utf8_file_starts_cold(self, mocker: MockerFixture, tmp_path: Path) -> None:
        """Test that a cache file with undecodable bytes is ignored.

        Tests: NavCache.load with binary garbage
        How: Write bytes that are not valid UTF-8 into the cache file
        Why: A damaged cache must never stop a build
        """
        # Arrange
        mock_console = mocker.patch("mkautonav.cache.console")
        (tmp_path / CACHE_FILE).write_bytes(b"\xff\xfe\x00garbage")

        # Act
        cache = NavCache.load(tmp_path)

        # Assert
        assert cache.entries == {}
        mock_console.print.assert_called_once()

    def test_save_and_load(self, tmp_path: Path) -> None:
        """Test that entries survive a save/load cycle."""
        cache = NavCache()
        cache.set_times("/docs/a.md", TimesInfo(birth_time=1.0, modify_time=2.0, first_commit_time=3.0))
        cache.set_document("/docs/a.md", DocumentInfo(metadata={"sort": 1}, heading="A"))

        cache.save(tmp_path / "cache")
        loaded = NavCache.load(tmp_path / "cache")

        entry = loaded.entries["/docs/a.md"]
        assert entry.times.first_commit_time == 3.0
        assert entry.document == DocumentInfo(metadata={"sort": 1}, heading="A")

    def test_save_prunes_unvisited_entries(self, tmp_path: Path) -> None:
        """Test that entries for deleted documents are dropped on save."""
        cache = NavCache(
            {
                "/docs/kept.md": CacheEntry(times=TimesInfo(modify_time=1.0)),
                "/docs/deleted.md": CacheEntry(times=TimesInfo(modify_time=1.0)),
            }
        )
        cache.get("/docs/kept.md")

        cache.save(tmp_path)

        assert set(NavCache.load(tmp_path).entries) == {"/docs/kept.md"}

    def test_set_times_discards_document(self) -> None:
        """Test that refreshed timestamps invalidate cached document data."""
        cache = NavCache(
            {"/a.md": CacheEntry(times=TimesInfo(modify_time=1.0), document=DocumentInfo(heading="Old"))}
        )

        cache.set_times("/a.md", TimesInfo(modify_time=2.0))

        assert cache.entries["/a.md"].document is None

    def test_set_document_requires_entry(self) -> None:
        """Test that documents are not cached without timestamps."""
        cache = NavCache()

        cache.set_document("/a.md", DocumentInfo(heading="A"))

        assert cache.entries == {}


class TestDocumentReader:
    """Test suite for DocumentReader."""

    def test_reads_and_caches_document(self, tmp_path: Path) -> None:
        """Test that a parsed document is stored on its cache entry."""
        doc = tmp_path / "a.md"
        doc.write_text("---\ntitle: Hello\n---\n# Heading\n", encoding="utf-8")
        cache = NavCache()
        cache.set_times(str(doc), TimesInfo(modify_time=1.0))

        info = DocumentReader(cache).read(doc)

        assert info.metadata == {"title": "Hello"}
        assert info.heading == "Heading"
        assert cache.entries[str(doc)].document == info

    def test_cached_document_skips_parsing(self, mocker: MockerFixture, tmp_path: Path) -> None:
        """Test that cached frontmatter is reused without reading the file."""
        doc = tmp_path / "missing.md"
        cached = DocumentInfo(metadata={"sort": 2}, heading="Cached")
        cache = NavCache({str(doc): CacheEntry(times=TimesInfo(modify_time=1.0), document=cached)})
        parse = mocker.Mock(return_value=ParsedDocument())

        info = DocumentReader(cache, parse=parse).read(doc)

        assert info == cached
        assert info is not cached
        parse.assert_not_called()

    def test_invalid_frontmatter_propagates(self, tmp_path: Path) -> None:
        """Test that broken frontmatter aborts with FrontmatterError."""
        doc = tmp_path / "bad.md"
        doc.write_text("---\n- just\n- a list\n---\n", encoding="utf-8")

        with pytest.raises(FrontmatterError):
            DocumentReader(NavCache()).read(doc)

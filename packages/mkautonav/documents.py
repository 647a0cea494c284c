"""Cached frontmatter and heading extraction for markdown documents."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from mkautonav.cache import DocumentInfo, NavCache
from mkautonav.yaml_utils import ParsedDocument, extract_heading, parse_document


class DocumentReader:
    """Read document metadata, reusing cache entries validated by the timestamp resolver.

    ``read`` must run after ``TimestampResolver.resolve`` for the same path:
    the resolver drops the cached document whenever the file has changed.
    """

    def __init__(self, cache: NavCache, parse: Callable[[str], ParsedDocument] = parse_document) -> None:
        """Initialize reader.

        Args:
            cache: Cache shared with the timestamp resolver
            parse: Frontmatter parser
        """
        self.cache = cache
        self.parse = parse

    def read(self, path: Path) -> DocumentInfo:
        """Return frontmatter and heading of the document at path.

        Args:
            path: Absolute document path

        Returns:
            Document metadata

        Raises:
            OSError: If the document cannot be read
            FrontmatterError: If the frontmatter is invalid
        """
        key = str(path)
        entry = self.cache.get(key)
        if entry is not None and entry.document is not None:
            return entry.document.model_copy(deep=True)

        parsed = self.parse(path.read_text(encoding="utf-8"))
        document = DocumentInfo(metadata=parsed.metadata, heading=extract_heading(parsed.body, parsed.metadata))
        self.cache.set_document(key, document)
        return document.model_copy(deep=True)

"""Persistent timestamp and frontmatter cache.

The cache is keyed by absolute path. An entry is only trusted while its
stored ``modify_time`` equals the file's current modification time; entries
that were not visited during a run are dropped on save.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, TypeAdapter, ValidationError
from rich.console import Console

from mkautonav.models import TimesInfo

# Initialize Rich console
console = Console()

CACHE_FILE = "mkautonav-cache.json"


class DocumentInfo(BaseModel):
    """Frontmatter and heading extracted from a document."""

    metadata: dict[str, Any] = Field(default_factory=dict)
    heading: str | None = None


class CacheEntry(BaseModel):
    """Cached data for one file or folder."""

    times: TimesInfo
    document: DocumentInfo | None = None


_ENTRIES_ADAPTER: TypeAdapter[dict[str, CacheEntry]] = TypeAdapter(dict[str, CacheEntry])


class NavCache:
    """In-memory view of the cache file for a single generation pass."""

    def __init__(self, entries: dict[str, CacheEntry] | None = None) -> None:
        """Initialize cache.

        Args:
            entries: Previously persisted entries
        """
        self.entries: dict[str, CacheEntry] = entries or {}
        self.visited: set[str] = set()
        self.hits = 0

    @classmethod
    def load(cls, cache_dir: Path) -> NavCache:
        """Load the cache file, starting cold when it is missing or corrupt.

        Args:
            cache_dir: Directory holding the cache file

        Returns:
            Loaded cache
        """
        cache_path = cache_dir / CACHE_FILE
        try:
            raw = cache_path.read_bytes()
        except OSError:
            return cls()

        try:
            return cls(_ENTRIES_ADAPTER.validate_json(raw))
        except (ValidationError, UnicodeDecodeError):
            console.print(f"[yellow]Ignoring unreadable cache file {cache_path}[/yellow]")
            return cls()

    def get(self, key: str) -> CacheEntry | None:
        """Return the entry for key and mark it as visited."""
        self.visited.add(key)
        return self.entries.get(key)

    def set_times(self, key: str, times: TimesInfo) -> None:
        """Store fresh timestamps, discarding any stale document data."""
        self.visited.add(key)
        self.entries[key] = CacheEntry(times=times)

    def set_document(self, key: str, document: DocumentInfo) -> None:
        """Attach document data to an existing entry."""
        self.visited.add(key)
        entry = self.entries.get(key)
        if entry is None:
            # Documents are only cached alongside their timestamps
            return
        entry.document = document

    def prune(self) -> None:
        """Drop entries that were not visited during this pass."""
        self.entries = {key: entry for key, entry in self.entries.items() if key in self.visited}

    def save(self, cache_dir: Path) -> None:
        """Prune and write the cache file.

        Args:
            cache_dir: Directory holding the cache file
        """
        self.prune()
        cache_dir.mkdir(parents=True, exist_ok=True)
        data = _ENTRIES_ADAPTER.dump_json(self.entries)
        _ = (cache_dir / CACHE_FILE).write_bytes(data)

"""Pytest configuration for mkautonav."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from mkautonav.cache import NavCache
from mkautonav.documents import DocumentReader
from mkautonav.models import AutoNavOptions, Item
from mkautonav.timestamps import LocalTimes, TimestampResolver
from mkautonav.tree import build_tree


class FakeTimes:
    """Deterministic stand-in for filesystem stat and git history.

    Times are looked up by file or folder name.
    """

    def __init__(self) -> None:
        self.created: dict[str, float] = {}
        self.modified: dict[str, float] = {}
        self.commits: dict[str, list[float]] = {}
        self.history_calls: list[Path] = []

    def stat(self, path: Path) -> LocalTimes:
        return LocalTimes(created=self.created.get(path.name, 1000.0), modified=self.modified.get(path.name, 1.0))

    def history(self, path: Path) -> list[float]:
        self.history_calls.append(path)
        return list(self.commits.get(path.name, []))


@pytest.fixture
def fake_times() -> FakeTimes:
    """Provide fake timestamp providers.

    Returns:
        Fresh FakeTimes instance
    """
    return FakeTimes()


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create an empty documentation source directory.

    Args:
        tmp_path: Pytest temporary directory

    Returns:
        Path to the docs directory
    """
    path = tmp_path / "docs"
    path.mkdir()
    return path


@pytest.fixture
def make_docs(docs_dir: Path) -> Callable[[dict[str, str]], list[str]]:
    """Provide a helper that writes documents below docs_dir.

    Args:
        docs_dir: Documentation source directory

    Returns:
        Function taking {relative path: content} and returning the relative paths
    """

    def _make(files: dict[str, str]) -> list[str]:
        for rel_path, content in files.items():
            target = docs_dir / rel_path
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        return list(files)

    return _make


@pytest.fixture
def build(docs_dir: Path, fake_times: FakeTimes) -> Callable[..., list[Item]]:
    """Provide a helper that builds a tree from relative paths with fake times.

    Args:
        docs_dir: Documentation source directory
        fake_times: Fake timestamp providers

    Returns:
        Function (paths, options=None, cache=None) -> tree
    """

    def _build(paths: list[str], options: AutoNavOptions | None = None, cache: NavCache | None = None) -> list[Item]:
        nav_cache = cache if cache is not None else NavCache()
        timestamps = TimestampResolver(nav_cache, stat=fake_times.stat, history=fake_times.history)
        return build_tree(paths, options or AutoNavOptions(), docs_dir, timestamps, DocumentReader(nav_cache))

    return _build

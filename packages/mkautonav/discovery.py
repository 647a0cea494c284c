"""Document discovery under the source directory."""

from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatch
from pathlib import Path

# Infrastructure directories and the site home page are never part of the tree
DEFAULT_EXCLUDE = ("**/node_modules/**", "**/dist/**", "index.md")


def _is_excluded(rel_path: str, patterns: Iterable[str]) -> bool:
    """Check a posix relative path against glob-style exclude patterns.

    A leading ``**/`` also matches at the top level, so ``**/dist/**``
    excludes ``dist/a.md`` as well as ``x/dist/a.md``.
    """
    for pattern in patterns:
        if fnmatch(rel_path, pattern):
            return True
        if pattern.startswith("**/") and fnmatch(rel_path, pattern[3:]):
            return True
    return False


def _is_hidden(rel_path: str) -> bool:
    """Check for a dot-file or a path through a dot-directory (``.venv/``, ``.github/``)."""
    return any(part.startswith(".") for part in rel_path.split("/"))


def normalize_pattern(pattern: str) -> str:
    """Rewrite components like ``**.md`` as ``**/*.md``.

    pathlib only accepts ``**`` as a whole path component.
    """
    parts: list[str] = []
    for part in pattern.split("/"):
        if "**" in part and part != "**":
            parts.extend(["**", part.replace("**", "*")])
        else:
            parts.append(part)
    return "/".join(parts)


def list_files(src_dir: Path, patterns: Iterable[str], exclude: Iterable[str] = ()) -> list[str]:
    """List documents matching the include patterns.

    Dot-files and anything below a dot-directory are skipped.

    Args:
        src_dir: Documentation source directory
        patterns: Glob patterns relative to src_dir
        exclude: Additional exclude patterns (``srcExclude``)

    Returns:
        Sorted, de-duplicated posix paths relative to src_dir
    """
    ignore = [*DEFAULT_EXCLUDE, *exclude]
    found: set[str] = set()
    for pattern in patterns:
        for path in src_dir.glob(normalize_pattern(pattern)):
            if not path.is_file():
                continue
            rel_path = path.relative_to(src_dir).as_posix()
            if not _is_hidden(rel_path) and not _is_excluded(rel_path, ignore):
                found.add(rel_path)
    return sorted(found)

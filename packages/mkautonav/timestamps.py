"""Timestamp resolution for files and folders.

Resolution order: cache entry (when the modification time is unchanged),
then git history, then the local filesystem stat.
"""

from __future__ import annotations

import subprocess
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from shutil import which

from mkautonav.cache import NavCache
from mkautonav.models import TimesInfo

GIT_LOG_TIMEOUT = 10
GIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


@dataclass
class LocalTimes:
    """Filesystem creation and modification times."""

    created: float
    modified: float


def stat_local(path: Path) -> LocalTimes:
    """Read creation and modification time from the filesystem.

    Platforms without a birth time report the inode change time instead.

    Args:
        path: File or folder path

    Returns:
        Local timestamps in epoch seconds
    """
    st = path.stat()
    created = getattr(st, "st_birthtime", None) or st.st_ctime
    return LocalTimes(created=created, modified=st.st_mtime)


def history_log(path: Path) -> list[float]:
    """List commit timestamps touching path, newest first.

    Any git failure (not installed, not a repository, timeout) yields an
    empty list.

    Args:
        path: Absolute file path

    Returns:
        Commit times in epoch seconds
    """
    if not (git_cmd := which("git")):
        return []

    with suppress(subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError):
        result = subprocess.run(
            [git_cmd, "--no-pager", "log", "--pretty=%ci", "--", path.name],
            cwd=path.parent,
            capture_output=True,
            text=True,
            check=True,
            timeout=GIT_LOG_TIMEOUT,
        )
        times: list[float] = []
        for line in result.stdout.splitlines():
            with suppress(ValueError):
                times.append(datetime.strptime(line.strip(), GIT_DATE_FORMAT).timestamp())
        return times
    return []


class TimestampResolver:
    """Resolve the timestamp quadruple of a path through the cache."""

    def __init__(
        self,
        cache: NavCache,
        stat: Callable[[Path], LocalTimes] = stat_local,
        history: Callable[[Path], list[float]] = history_log,
    ) -> None:
        """Initialize resolver.

        Args:
            cache: Cache shared with the document reader
            stat: Local timestamp provider
            history: Version-control timestamp provider
        """
        self.cache = cache
        self.stat = stat
        self.history = history

    def resolve(self, path: Path, is_folder: bool) -> TimesInfo:
        """Return the timestamps for path.

        Folders only get their local pair here; their history times are
        aggregated from descendants once the tree is complete.

        Args:
            path: Absolute path
            is_folder: Whether path is a folder

        Returns:
            Timestamp quadruple
        """
        key = str(path)
        local = self.stat(path)

        entry = self.cache.get(key)
        if entry is not None and entry.times.modify_time == local.modified:
            self.cache.hits += 1
            return entry.times.model_copy()

        times = TimesInfo(birth_time=local.created, modify_time=local.modified)
        if not is_folder:
            if commits := self.history(path):
                times.first_commit_time = min(commits)
                times.last_commit_time = max(commits)

        self.cache.set_times(key, times)
        return times.model_copy()

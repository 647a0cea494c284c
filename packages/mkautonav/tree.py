"""Build the navigation tree from a flat list of document paths."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

from mkautonav.documents import DocumentReader
from mkautonav.models import AutoNavOptions, Item, ItemOptions
from mkautonav.resolver import find_item_setting, merge_defaults, normalize_settings, resolve_option
from mkautonav.timestamps import TimestampResolver


def build_tree(
    paths: Iterable[str],
    options: AutoNavOptions,
    src_dir: Path,
    timestamps: TimestampResolver,
    documents: DocumentReader,
) -> list[Item]:
    """Turn relative document paths into a nested item tree.

    Folders shared by several paths become a single node. Hidden items are
    left out together with everything below them. Folder history times are
    aggregated once every path has been added.

    Args:
        paths: Posix paths relative to src_dir
        options: Generation options
        src_dir: Documentation source directory
        timestamps: Timestamp resolver
        documents: Document metadata reader

    Returns:
        Top-level items in discovery order
    """
    settings = normalize_settings(options.items_setting)
    root: list[Item] = []
    hidden: set[str] = set()

    for path in paths:
        siblings = root
        current_path = ""
        parts = [part for part in path.split("/") if part]

        for depth, name in enumerate(parts):
            current_path = f"{current_path}/{name}" if current_path else name
            if current_path in hidden:
                break

            node = next((sibling for sibling in siblings if sibling.name == name), None)
            if node is None:
                is_folder = depth < len(parts) - 1
                node = _create_item(
                    name, is_folder, current_path, src_dir, settings, options, timestamps, documents, len(siblings)
                )
                if node is None:
                    hidden.add(current_path)
                    break
                siblings.append(node)
            elif not node.is_folder and depth < len(parts) - 1:
                # A file already owns this name; files never get children
                break

            siblings = node.children

    update_folder_times(root)
    return root


def _create_item(
    name: str,
    is_folder: bool,
    current_path: str,
    src_dir: Path,
    settings: dict[str, ItemOptions],
    options: AutoNavOptions,
    timestamps: TimestampResolver,
    documents: DocumentReader,
    index: int,
) -> Item | None:
    """Resolve settings, timestamps and metadata for a new node.

    Returns:
        The new item, or None if it resolves to hidden
    """
    real_path = src_dir / current_path
    item_options = merge_defaults(find_item_setting(settings, current_path, name), options.use_article_title)
    times = timestamps.resolve(real_path, is_folder)

    metadata: dict[str, Any] = {}
    heading: str | None = None
    if not is_folder:
        document = documents.read(real_path)
        metadata = document.metadata
        heading = document.heading

    if resolve_option(metadata, item_options, "hide", options.frontmatter_prefix):
        return None

    return Item(
        name=name,
        is_folder=is_folder,
        options=item_options,
        times=times,
        metadata=metadata,
        heading=heading,
        index=index,
    )


def _folder_commit_times(children: list[Item]) -> tuple[float | None, float | None]:
    """Min first and max last time over all descendant files.

    A file without history contributes its local creation and modification
    times instead of commit times.
    """
    first: float | None = None
    last: float | None = None
    for child in children:
        if child.is_folder:
            child_first, child_last = _folder_commit_times(child.children)
        else:
            child_first = child.times.first_commit_time or child.times.birth_time
            child_last = child.times.last_commit_time or child.times.modify_time
        if child_first is not None and (first is None or child_first < first):
            first = child_first
        if child_last is not None and (last is None or child_last > last):
            last = child_last
    return first, last


def update_folder_times(items: list[Item]) -> None:
    """Set folder first/last times from their descendant files, bottom-up.

    Args:
        items: Sibling list to update in place
    """
    for item in items:
        if item.is_folder:
            update_folder_times(item.children)
            item.times.first_commit_time, item.times.last_commit_time = _folder_commit_times(item.children)


def count_items(items: list[Item]) -> int:
    """Count all nodes of a tree."""
    return sum(1 + count_items(item.children) for item in items)

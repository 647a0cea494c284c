"""Per-item configuration resolution.

Each attribute of an item is resolved independently, highest precedence
first:

1. frontmatter under ``<prefix>-<key>`` (only with a configured prefix)
2. frontmatter under ``<key>``
3. the explicit ``itemsSetting`` value (already merged with global defaults)

``None`` means no layer set the attribute and the built-in default applies.
"""

from __future__ import annotations

import posixpath
from collections.abc import Mapping
from typing import Any

from mkautonav.models import Item, ItemOptions

MARKDOWN_EXT = ".md"


def strip_ext(name: str) -> str:
    """Remove a trailing ``.md`` extension from a file name."""
    return name[: -len(MARKDOWN_EXT)] if name.endswith(MARKDOWN_EXT) else name


def resolve_option(metadata: Mapping[str, Any], options: ItemOptions, key: str, prefix: str = "") -> Any:
    """Resolve one attribute across frontmatter and explicit settings.

    Args:
        metadata: Document frontmatter (empty for folders)
        options: Explicit settings of the item
        key: Attribute name as written in frontmatter (e.g. ``sort``, ``useArticleTitle``)
        prefix: Optional frontmatter key prefix

    Returns:
        The effective value, or None when unset everywhere
    """
    if prefix and (value := metadata.get(f"{prefix}-{key}")) is not None:
        return value
    if (value := metadata.get(key)) is not None:
        return value
    return options.get(key)


def item_option(item: Item, key: str, prefix: str = "") -> Any:
    """Resolve one attribute of a tree item.

    Args:
        item: Tree item
        key: Attribute name
        prefix: Optional frontmatter key prefix

    Returns:
        The effective value, or None when unset everywhere
    """
    return resolve_option(item.metadata, item.options, key, prefix)


def normalize_settings(settings: Mapping[str, ItemOptions]) -> dict[str, ItemOptions]:
    """Normalize ``itemsSetting`` keys to posix relative paths.

    Args:
        settings: Raw ``itemsSetting`` mapping

    Returns:
        Mapping with normalized keys, in input order
    """
    return {posixpath.normpath(key.replace("\\", "/")).lstrip("/"): value for key, value in settings.items()}


def find_item_setting(settings: Mapping[str, ItemOptions], current_path: str, name: str) -> ItemOptions | None:
    """Find the explicit settings for an item.

    Tries the accumulated relative path first (with and without its ``.md``
    extension), then the bare name, then the name without its extension.
    The first matching key wins.

    Args:
        settings: Normalized ``itemsSetting`` mapping
        current_path: Item path relative to the source directory
        name: Item file or folder name

    Returns:
        Matching settings or None
    """
    for candidate in (current_path, strip_ext(current_path), name, strip_ext(name)):
        if candidate in settings:
            return settings[candidate]
    return None


def merge_defaults(setting: ItemOptions | None, use_article_title: bool | None) -> ItemOptions:
    """Fill unset explicit settings with global defaults.

    Args:
        setting: Matched explicit settings, if any
        use_article_title: Global ``useArticleTitle`` default

    Returns:
        Fresh settings snapshot for one item
    """
    options = setting.model_copy() if setting is not None else ItemOptions()
    if options.use_article_title is None:
        options.use_article_title = use_article_title
    return options

"""Generate nav and sidebar from a GitBook-style SUMMARY.md outline."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from mkautonav.models import NavItemDict, SidebarItemDict, SummaryOptions

HEADING_LINE = re.compile(r"^\s*(#+)\s+(.+?)\s*$")
LINK_LINE = re.compile(r"^(\s*)[*\-]\s+\[(.+)\]\((.+)\.md\)\s*$")


@dataclass
class _OpenNode:
    """Node on the parse stack.

    Headings use negative depths (``#`` = -1, ``##`` = -2), list items use
    their indentation level (0, 1, ...).
    """

    depth: float
    entry: SidebarItemDict


def parse_summary(
    text: str, collapsed: bool | None = None, remove_escape: bool = True
) -> tuple[list[NavItemDict], list[SidebarItemDict]]:
    """Parse outline text into nav entries and a sidebar tree.

    Args:
        text: Outline file content
        collapsed: ``collapsed`` value for every entry (omitted when None)
        remove_escape: Strip backslash escapes from entry texts

    Returns:
        Tuple of (nav entries, sidebar entries)
    """
    sidebar: list[SidebarItemDict] = []
    nav: list[NavItemDict] = []
    stack: list[_OpenNode] = []
    indent: str | None = None

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped:
            continue

        if stripped.startswith("#"):
            match = HEADING_LINE.match(line)
            if match is None:
                continue
            depth = -len(match.group(1))
            entry = _new_entry(_clean(match.group(2), remove_escape), None, collapsed)

            if depth == -1:
                sidebar.append(entry)
                stack = [_OpenNode(depth, entry)]
                nav.append({"text": entry["text"], "link": ""})
                continue

            # Close list items and headings at the same or deeper level
            while stack and (stack[-1].depth >= 0 or stack[-1].depth <= depth):
                stack.pop()
            if stack:
                stack[-1].entry["items"].append(entry)
                stack.append(_OpenNode(depth, entry))

        elif stripped.startswith(("*", "-")):
            match = LINK_LINE.match(line)
            if match is None:
                continue
            line_indent, raw_text, link = match.groups()
            if not link.startswith("/"):
                link = f"/{link}"
            entry = _new_entry(_clean(raw_text, remove_escape), link, collapsed)

            if indent is None and line_indent:
                indent = line_indent
            depth = len(line_indent) / len(indent) if line_indent and indent else 0

            while stack and stack[-1].depth >= depth:
                stack.pop()
            if stack:
                stack[-1].entry["items"].append(entry)
                stack.append(_OpenNode(depth, entry))
                if nav and not nav[-1]["link"]:
                    nav[-1]["link"] = link

    for entry in sidebar:
        _drop_empty_items(entry)
    return nav, sidebar


def load_summary(options: SummaryOptions, base_dir: Path) -> tuple[list[NavItemDict], list[SidebarItemDict]]:
    """Read and parse the configured outline file.

    Args:
        options: Summary mode options
        base_dir: Directory relative targets are resolved against

    Returns:
        Tuple of (nav entries, sidebar entries)

    Raises:
        OSError: If the outline file cannot be read
    """
    target = options.target if options.target.is_absolute() else base_dir / options.target
    text = target.read_text(encoding="utf-8")
    return parse_summary(text, options.collapsed, options.remove_escape)


def _clean(text: str, remove_escape: bool) -> str:
    return text.replace("\\", "") if remove_escape else text


def _new_entry(text: str, link: str | None, collapsed: bool | None) -> SidebarItemDict:
    entry: SidebarItemDict = {"text": text, "items": []}
    if link is not None:
        entry["link"] = link
    if collapsed is not None:
        entry["collapsed"] = collapsed
    return entry


def _drop_empty_items(entry: SidebarItemDict) -> None:
    """Remove empty ``items`` lists from link entries, recursively."""
    for child in entry.get("items", []):
        _drop_empty_items(child)
    if "link" in entry and not entry.get("items"):
        entry.pop("items", None)

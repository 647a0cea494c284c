"""YAML utilities for mkautonav.

Centralizes all YAML handling: site configuration loading, document
frontmatter parsing and writing generated navigation files.
"""

from __future__ import annotations

import re
from contextlib import suppress
from dataclasses import dataclass, field
from io import StringIO
from pathlib import Path
from typing import Any, cast

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError
from ruamel.yaml.util import load_yaml_guess_indent

from mkautonav.models import FrontmatterError

# Re-export YAMLError for consumers that need to catch it
__all__ = [
    "ParsedDocument",
    "YAMLError",
    "dump_yaml",
    "extract_heading",
    "load_yaml",
    "load_yaml_from_path",
    "parse_document",
    "write_yaml",
]

FRONTMATTER_PATTERN = re.compile(r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)
HEADING_PATTERN = re.compile(r"\s*#\s+(.*)[\n\r]")
FRONTMATTER_VAR_PATTERN = re.compile(r"\{\{\s*\$frontmatter\.(\S+?)\s*\}\}")


@dataclass
class ParsedDocument:
    """A markdown document split into frontmatter and body.

    Attributes:
        metadata: Frontmatter key/value map (empty when absent)
        body: Text after the frontmatter block
    """

    metadata: dict[str, Any] = field(default_factory=dict)
    body: str = ""


def load_yaml(content: str) -> dict[str, object] | None:
    """Load YAML content for read-only access.

    Args:
        content: YAML content as string

    Returns:
        Parsed dictionary or None if content is not a valid dict
    """
    yaml = YAML(typ="safe")
    with suppress(YAMLError):
        data = yaml.load(content)
        if isinstance(data, dict):
            return cast(dict[str, object], data)
    return None


def load_yaml_from_path(path: Path) -> dict[str, object] | None:
    """Load YAML file for read-only access.

    Convenience wrapper around load_yaml() for file paths.

    Args:
        path: Path to YAML file

    Returns:
        Parsed dictionary or None if file doesn't exist or isn't valid YAML dict
    """
    if not path.exists():
        return None
    with suppress(OSError):
        content = path.read_text(encoding="utf-8")
        return load_yaml(content)
    return None


def parse_document(raw_text: str) -> ParsedDocument:
    """Split a markdown document into frontmatter metadata and body.

    Args:
        raw_text: Full document text

    Returns:
        Parsed document

    Raises:
        FrontmatterError: If the frontmatter block is not a valid YAML mapping
    """
    match = FRONTMATTER_PATTERN.match(raw_text)
    if match is None:
        return ParsedDocument(metadata={}, body=raw_text)

    yaml = YAML(typ="safe")
    try:
        data = yaml.load(match.group(1))
    except YAMLError as e:
        msg = f"Invalid frontmatter: {e}"
        raise FrontmatterError(msg) from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        msg = f"Frontmatter must be a mapping, got {type(data).__name__}"
        raise FrontmatterError(msg)

    return ParsedDocument(metadata=cast(dict[str, Any], data), body=raw_text[match.end() :])


def extract_heading(body: str, metadata: dict[str, Any]) -> str | None:
    """Extract the first-level heading when it opens the document body.

    ``{{ $frontmatter.key }}`` placeholders in the heading are replaced with
    the matching frontmatter values. Unknown keys are left untouched.

    Args:
        body: Document text without frontmatter
        metadata: Frontmatter of the same document

    Returns:
        Heading text, or None if the body does not start with a ``#`` heading
    """
    match = HEADING_PATTERN.match(body)
    if match is None:
        return None
    heading = match.group(1)

    def _substitute(var: re.Match[str]) -> str:
        key = var.group(1)
        return str(metadata[key]) if key in metadata else var.group(0)

    return FRONTMATTER_VAR_PATTERN.sub(_substitute, heading)


def _detect_yaml_indentation(content: str) -> tuple[int, int, int]:
    """Detect indentation settings from YAML content using ruamel.yaml.

    Args:
        content: YAML file content as string

    Returns:
        Tuple of (mapping_indent, sequence_indent, offset) for ruamel.yaml.indent()
    """
    _, indent, block_seq_indent = load_yaml_guess_indent(content)

    mapping_indent = indent if indent is not None else 2
    offset = block_seq_indent if block_seq_indent is not None else 0

    # indent includes the offset for sequence items
    if offset > 0:
        mapping_indent = indent - offset if indent else 2

    return (mapping_indent, mapping_indent, offset)


def dump_yaml(data: object, indent: tuple[int, int, int] = (2, 2, 0)) -> str:
    """Serialize data as block-style YAML.

    Args:
        data: Plain Python data (dicts, lists, scalars)
        indent: Tuple of (mapping_indent, sequence_indent, offset)

    Returns:
        YAML document text
    """
    yaml = YAML()
    yaml.default_flow_style = False
    yaml.indent(mapping=indent[0], sequence=indent[1], offset=indent[2])  # pyright: ignore[reportAttributeAccessIssue]
    stream = StringIO()
    yaml.dump(data, stream)
    return stream.getvalue()


def write_yaml(path: Path, data: object) -> None:
    """Write data to a YAML file, keeping the indentation style of an existing file.

    Args:
        path: Destination file
        data: Plain Python data to write
    """
    indent = (2, 2, 0)
    if path.exists():
        with suppress(OSError, YAMLError):
            existing = path.read_text(encoding="utf-8")
            if existing.strip():
                indent = _detect_yaml_indentation(existing)
    _ = path.write_text(dump_yaml(data, indent), encoding="utf-8")

"""Tests for YAML and frontmatter utilities."""

from __future__ import annotations

from pathlib import Path

import pytest
from mkautonav.models import FrontmatterError
from mkautonav.yaml_utils import (
    dump_yaml,
    extract_heading,
    load_yaml,
    load_yaml_from_path,
    parse_document,
    write_yaml,
)


class TestParseDocument:
    """Test suite for parse_document."""

    def test_frontmatter_split_from_body(self) -> None:
        """Test that the leading YAML block becomes metadata."""
        parsed = parse_document("---\nsort: 2\ntitle: Setup\n---\n# Setup\nBody\n")

        assert parsed.metadata == {"sort": 2, "title": "Setup"}
        assert parsed.body == "# Setup\nBody\n"

    def test_no_frontmatter(self) -> None:
        """Test documents without a frontmatter block."""
        parsed = parse_document("# Title\n")

        assert parsed.metadata == {}
        assert parsed.body == "# Title\n"

    def test_empty_frontmatter(self) -> None:
        """Test that an empty block yields empty metadata."""
        parsed = parse_document("---\n---\n# Title\n")

        assert parsed.metadata == {}
        assert parsed.body == "# Title\n"

    def test_crlf_line_endings(self) -> None:
        """Test frontmatter written with Windows line endings."""
        parsed = parse_document("---\r\nhide: true\r\n---\r\n# Title\r\n")

        assert parsed.metadata == {"hide": True}

    def test_dashes_later_in_document_are_not_frontmatter(self) -> None:
        """Test that a horizontal rule in the body is left alone."""
        parsed = parse_document("# Title\n\n---\n\nText\n")

        assert parsed.metadata == {}

    def test_invalid_yaml_raises(self) -> None:
        """Test that malformed YAML is reported."""
        with pytest.raises(FrontmatterError, match="Invalid frontmatter"):
            parse_document("---\nkey: [unclosed\n---\n")

    def test_non_mapping_raises(self) -> None:
        """Test that a scalar frontmatter block is rejected."""
        with pytest.raises(FrontmatterError, match="mapping"):
            parse_document("---\njust text\n---\n")


class TestExtractHeading:
    """Test suite for extract_heading."""

    def test_first_level_heading(self) -> None:
        """Test extraction of a leading first-level heading."""
        assert extract_heading("\n# Getting Started\nText\n", {}) == "Getting Started"

    def test_heading_must_open_document(self) -> None:
        """Test that headings after other content are ignored."""
        assert extract_heading("Intro text\n# Later\n", {}) is None

    def test_second_level_heading_ignored(self) -> None:
        """Test that ## headings do not count."""
        assert extract_heading("## Section\n", {}) is None

    def test_frontmatter_placeholders_substituted(self) -> None:
        """Test ``{{ $frontmatter.key }}`` substitution."""
        metadata = {"product": "Acme", "version": 3}

        heading = extract_heading("# {{ $frontmatter.product }} v{{$frontmatter.version}}\n", metadata)

        assert heading == "Acme v3"

    def test_unknown_placeholder_left_intact(self) -> None:
        """Test that placeholders without a matching key stay as written."""
        assert extract_heading("# {{ $frontmatter.missing }}\n", {}) == "{{ $frontmatter.missing }}"


class TestYamlFiles:
    """Test suite for YAML loading and writing."""

    def test_load_yaml_mapping(self) -> None:
        """Test loading a mapping."""
        assert load_yaml("srcDir: docs\n") == {"srcDir": "docs"}

    def test_load_yaml_non_mapping(self) -> None:
        """Test that lists and invalid YAML yield None."""
        assert load_yaml("- a\n- b\n") is None
        assert load_yaml("key: [unclosed") is None

    def test_load_yaml_from_missing_path(self, tmp_path: Path) -> None:
        """Test loading a file that does not exist."""
        assert load_yaml_from_path(tmp_path / "missing.yml") is None

    def test_dump_yaml_block_style(self) -> None:
        """Test that output uses block style."""
        text = dump_yaml({"nav": [{"text": "Guide", "link": "/guide/intro"}]})

        assert text == "nav:\n- text: Guide\n  link: /guide/intro\n"

    def test_write_yaml_keeps_existing_indentation(self, tmp_path: Path) -> None:
        """Test that rewriting a file preserves its sequence indentation style.

        Tests: write_yaml indentation detection
        How: Existing file uses offset sequence indentation
        Why: Regenerated files should produce minimal diffs
        """
        # Arrange
        target = tmp_path / "autonav.yml"
        target.write_text("nav:\n  - text: Old\n    link: /old\n", encoding="utf-8")

        # Act
        write_yaml(target, {"nav": [{"text": "New", "link": "/new"}]})

        # Assert
        assert target.read_text(encoding="utf-8").startswith("nav:\n  - text: New\n")

    def test_write_yaml_new_file(self, tmp_path: Path) -> None:
        """Test writing a file that does not exist yet."""
        target = tmp_path / "autonav.yml"

        write_yaml(target, {"sidebar": {"/guide/": []}})

        assert load_yaml_from_path(target) == {"sidebar": {"/guide/": []}}

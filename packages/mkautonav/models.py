"""Data models for mkautonav."""

from __future__ import annotations

import importlib
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, ClassVar, NotRequired, TypedDict

from pydantic import BaseModel, ConfigDict, Field, field_validator


class MessageType(Enum):
    """Message types with associated display styles."""

    ERROR = ("red", "Error")
    SUCCESS = ("green", "Success")
    INFO = ("blue", "Info")
    WARNING = ("yellow", "Warning")


class AutoNavError(Exception):
    """Base exception for navigation generation errors."""


class ConfigError(AutoNavError):
    """Raised when configuration is missing or invalid."""


class FrontmatterError(AutoNavError):
    """Raised when a document's frontmatter block cannot be parsed."""


class ItemOptions(BaseModel):
    """Explicit settings for a single file or folder.

    The same keys may also be set in a document's frontmatter, optionally
    prefixed with ``<frontmatterPrefix>-``. Frontmatter values win.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

    hide: bool | None = None
    sort: int | float | None = None
    title: str | None = None
    use_article_title: bool | None = Field(None, alias="useArticleTitle")
    collapsed: bool | None = None

    def get(self, key: str) -> Any:
        """Look up a setting by field name or alias.

        Args:
            key: Field name (``use_article_title``) or alias (``useArticleTitle``)

        Returns:
            The stored value, or None when the key is unknown or unset
        """
        for name, info in type(self).model_fields.items():
            if key in (name, info.alias):
                return getattr(self, name)
        return None


class TimesInfo(BaseModel):
    """Local and version-control timestamps of a file or folder (epoch seconds)."""

    birth_time: float | None = None
    modify_time: float | None = None
    first_commit_time: float | None = None
    last_commit_time: float | None = None

    @property
    def earliest(self) -> float:
        """First commit time if known, else local creation time."""
        return self.first_commit_time or self.birth_time or 0.0


class SummaryOptions(BaseModel):
    """Outline-file (SUMMARY.md) mode configuration."""

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

    target: Path
    collapsed: bool | None = None
    remove_escape: bool = Field(True, alias="removeEscape")


CompareFn = Callable[..., float]


class AutoNavOptions(BaseModel):
    """Navigation generation options.

    Accepts the camelCase keys used in site configuration files as well as
    the snake_case field names.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

    pattern: str | list[str] = "**/*.md"
    index_as_folder_link: bool = Field(True, alias="indexAsFolderLink")
    items_setting: dict[str, ItemOptions] = Field(default_factory=dict, alias="itemsSetting")
    frontmatter_prefix: str = Field("", alias="frontmatterPrefix")
    use_article_title: bool | None = Field(None, alias="useArticleTitle")
    compare_fn: CompareFn | None = Field(None, alias="compareFn")
    summary: SummaryOptions | None = None

    @field_validator("compare_fn", mode="before")
    @classmethod
    def _import_compare_fn(cls, value: object) -> object:
        """Resolve ``"package.module:function"`` strings to the named callable.

        Raises:
            ConfigError: If the module or attribute cannot be imported
        """
        if not isinstance(value, str):
            return value
        module_name, _, attr = value.partition(":")
        if not attr:
            module_name, _, attr = value.rpartition(".")
        try:
            return getattr(importlib.import_module(module_name), attr)
        except (ImportError, AttributeError, ValueError) as e:
            msg = f"Cannot import compareFn '{value}': {e}"
            raise ConfigError(msg) from e

    @property
    def patterns(self) -> list[str]:
        """Include patterns as a list."""
        return [self.pattern] if isinstance(self.pattern, str) else list(self.pattern)


class SiteConfig(BaseModel):
    """Host site configuration consumed and updated by the generator.

    Input keys: ``srcDir``, ``srcExclude``, ``cacheDir``, ``nav`` and the
    ``autoNav`` options block. Output keys: ``nav`` and ``sidebar``.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(populate_by_name=True)

    src_dir: Path = Field(Path("."), alias="srcDir")
    src_exclude: list[str] = Field(default_factory=list, alias="srcExclude")
    cache_dir: Path = Field(Path(".cache"), alias="cacheDir")
    nav: list[dict[str, Any]] | None = None
    sidebar: dict[str, list[dict[str, Any]]] | list[dict[str, Any]] | None = None
    auto_nav: AutoNavOptions | None = Field(None, alias="autoNav")

    def resolve_paths(self, base_dir: Path) -> SiteConfig:
        """Return a copy with relative directories anchored at base_dir.

        Args:
            base_dir: Directory containing the site configuration file

        Returns:
            Site configuration with absolute ``src_dir`` and ``cache_dir``
        """
        return self.model_copy(
            update={"src_dir": (base_dir / self.src_dir).resolve(), "cache_dir": (base_dir / self.cache_dir).resolve()}
        )


@dataclass
class Item:
    """A file or folder node in the navigation tree.

    Attributes:
        name: File or folder name (files keep their extension)
        is_folder: Whether the node is a folder
        options: Explicit settings merged with the global defaults
        times: Timestamp quadruple
        metadata: Frontmatter of the document (empty for folders)
        heading: First-level heading of the document
        index: Position among siblings before ordering
        children: Child nodes, always empty for files
    """

    name: str
    is_folder: bool
    options: ItemOptions = field(default_factory=ItemOptions)
    times: TimesInfo = field(default_factory=TimesInfo)
    metadata: dict[str, Any] = field(default_factory=dict)
    heading: str | None = None
    index: int = 0
    children: list[Item] = field(default_factory=list)


class NavItemDict(TypedDict):
    """Top navigation bar entry."""

    text: str
    activeMatch: NotRequired[str]
    link: str


class SidebarItemDict(TypedDict, total=False):
    """Sidebar entry: a link (file) or a group (folder)."""

    text: str
    link: str
    collapsed: bool
    items: list[SidebarItemDict]


@dataclass
class NavResult:
    """Generated navigation output."""

    nav: list[NavItemDict] | None
    sidebar: dict[str, list[SidebarItemDict]] | list[SidebarItemDict]
    item_count: int = 0
    cache_hits: int = 0

"""Core generation logic for mkautonav."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import cast

import tomlkit
from pydantic import ValidationError
from rich.console import Console
from tomlkit import exceptions

from mkautonav.cache import NavCache
from mkautonav.discovery import list_files
from mkautonav.documents import DocumentReader
from mkautonav.models import AutoNavOptions, ConfigError, MessageType, NavResult, SiteConfig
from mkautonav.ordering import sort_tree
from mkautonav.serializer import generate_nav, generate_sidebar
from mkautonav.summary import load_summary
from mkautonav.timestamps import LocalTimes, TimestampResolver, history_log, stat_local
from mkautonav.tree import build_tree, count_items
from mkautonav.yaml_utils import load_yaml_from_path, write_yaml

# Initialize Rich console
console = Console()

TOOL_TABLE = "mkautonav"


def display_message(message: str, message_type: MessageType = MessageType.INFO, title: str | None = None) -> None:
    """Display a formatted message panel.

    Args:
        message: The message text to display
        message_type: Type of message (affects styling)
        title: Optional panel title (defaults to message type)
    """
    from rich.panel import Panel

    color, default_title = message_type.value
    panel_title = title or default_title

    console.print(
        Panel(message, title=f"[bold {color}]{panel_title}[/bold {color}]", border_style=color, padding=(1, 2))
    )


def read_tool_options(project_dir: Path) -> AutoNavOptions | None:
    """Read ``[tool.mkautonav]`` from a pyproject.toml.

    Args:
        project_dir: Directory that may contain pyproject.toml

    Returns:
        Parsed options, or None when the file or table is absent

    Raises:
        ConfigError: If pyproject.toml or the table is invalid
    """
    pyproject_path = project_dir / "pyproject.toml"
    if not pyproject_path.exists():
        return None

    try:
        with open(pyproject_path, encoding="utf-8") as f:
            config = tomlkit.load(f).unwrap()
    except exceptions.TOMLKitError as e:
        msg = f"Failed to parse {pyproject_path}: {e}"
        raise ConfigError(msg) from e

    tool = config.get("tool")
    if not isinstance(tool, dict):
        return None
    table = cast(dict[str, object], tool).get(TOOL_TABLE)
    if not isinstance(table, dict):
        return None

    try:
        return AutoNavOptions.model_validate(table)
    except ValidationError as e:
        msg = f"Invalid [tool.{TOOL_TABLE}] in {pyproject_path}: {e}"
        raise ConfigError(msg) from e


def load_site_config(config_path: Path) -> SiteConfig:
    """Load the host site configuration file.

    Relative ``srcDir`` and ``cacheDir`` are resolved against the file's
    directory. Options fall back to ``[tool.mkautonav]`` in a neighbouring
    pyproject.toml when the file has no ``autoNav`` block.

    Args:
        config_path: Site configuration YAML file

    Returns:
        Validated site configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigError: If the file is not a valid configuration mapping
    """
    if not config_path.exists():
        msg = f"Site configuration not found: {config_path}"
        raise FileNotFoundError(msg)

    data = load_yaml_from_path(config_path)
    if data is None:
        msg = f"{config_path.name} is not a valid YAML mapping"
        raise ConfigError(msg)

    try:
        site = SiteConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid site configuration {config_path.name}: {e}"
        raise ConfigError(msg) from e

    base_dir = config_path.parent.resolve()
    site = site.resolve_paths(base_dir)
    if site.auto_nav is None:
        site.auto_nav = read_tool_options(base_dir) or AutoNavOptions()
    return site


def generate_navigation(
    site: SiteConfig,
    base_dir: Path | None = None,
    cache: NavCache | None = None,
    stat: Callable[[Path], LocalTimes] = stat_local,
    history: Callable[[Path], list[float]] = history_log,
) -> NavResult:
    """Generate nav and sidebar for a site and store them on it.

    A configured ``nav`` is never replaced. With ``summary`` options the
    outline file is used and everything else is ignored.

    Args:
        site: Site configuration with absolute directories
        base_dir: Directory a relative summary target is resolved against
        cache: Cache to use; when None it is loaded from and saved to ``site.cache_dir``
        stat: Local timestamp provider
        history: Version-control timestamp provider

    Returns:
        Generated navigation (``nav`` is None when the site already has one)
    """
    options = site.auto_nav or AutoNavOptions()
    keep_nav = bool(site.nav)

    if options.summary is not None:
        nav, summary_sidebar = load_summary(options.summary, base_dir or Path.cwd())
        result = NavResult(nav=None if keep_nav else nav, sidebar=summary_sidebar)
        _apply(site, result)
        return result

    owns_cache = cache is None
    nav_cache = NavCache.load(site.cache_dir) if cache is None else cache
    timestamps = TimestampResolver(nav_cache, stat=stat, history=history)
    documents = DocumentReader(nav_cache)

    paths = list_files(site.src_dir, options.patterns, site.src_exclude)
    tree = build_tree(paths, options, site.src_dir, timestamps, documents)
    tree = sort_tree(tree, options.compare_fn, options.frontmatter_prefix)

    result = NavResult(
        nav=None if keep_nav else generate_nav(tree, options.frontmatter_prefix),
        sidebar=generate_sidebar(tree, options.index_as_folder_link, options.frontmatter_prefix),
        item_count=count_items(tree),
        cache_hits=nav_cache.hits,
    )
    _apply(site, result)

    if owns_cache:
        nav_cache.save(site.cache_dir)
    return result


def _apply(site: SiteConfig, result: NavResult) -> None:
    """Store generated output on the site configuration."""
    if result.nav is not None:
        site.nav = [dict(entry) for entry in result.nav]
    site.sidebar = result.sidebar  # pyright: ignore[reportAttributeAccessIssue]


def write_output(output_path: Path, site: SiteConfig) -> None:
    """Write the site's nav and sidebar to a YAML or JSON file.

    Args:
        output_path: Destination file (``.json`` selects JSON)
        site: Site configuration holding generated output
    """
    data = {"nav": site.nav or [], "sidebar": site.sidebar or {}}
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix == ".json":
        _ = output_path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    else:
        write_yaml(output_path, data)

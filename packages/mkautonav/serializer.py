"""Serialize the ordered item tree into nav and sidebar structures."""

from __future__ import annotations

from mkautonav.models import Item, NavItemDict, SidebarItemDict
from mkautonav.resolver import item_option, strip_ext

INDEX_NAME = "index"


def display_name(item: Item, frontmatter_prefix: str = "") -> str:
    """Resolve the text shown for an item.

    Precedence: explicit title, then the document heading when
    ``useArticleTitle`` is on, then the name without extension.

    Args:
        item: Tree item
        frontmatter_prefix: Prefix for frontmatter overrides

    Returns:
        Display text
    """
    if title := item_option(item, "title", frontmatter_prefix):
        return str(title)
    if item_option(item, "useArticleTitle", frontmatter_prefix) and item.heading:
        return item.heading
    return strip_ext(item.name)


def first_article_link(item: Item, parent_path: str = "") -> str:
    """Link of the first document in a subtree.

    Args:
        item: Subtree root
        parent_path: Link path of the item's parent

    Returns:
        Link without the ``.md`` extension
    """
    path = f"{parent_path}/{item.name}"
    if item.children:
        return first_article_link(item.children[0], path)
    return strip_ext(path)


def generate_nav(tree: list[Item], frontmatter_prefix: str = "") -> list[NavItemDict]:
    """Build top navigation entries, one per top-level item.

    Args:
        tree: Ordered top-level items
        frontmatter_prefix: Prefix for frontmatter overrides

    Returns:
        Nav entries
    """
    return [
        {
            "text": display_name(item, frontmatter_prefix),
            "activeMatch": f"/{strip_ext(item.name)}/",
            "link": first_article_link(item),
        }
        for item in tree
    ]


def generate_sidebar(
    tree: list[Item], index_as_folder_link: bool = True, frontmatter_prefix: str = ""
) -> dict[str, list[SidebarItemDict]]:
    """Build the sidebar map, keyed by each top-level item's root path.

    Args:
        tree: Ordered top-level items
        index_as_folder_link: Fold ``index.md`` into its folder's link
        frontmatter_prefix: Prefix for frontmatter overrides

    Returns:
        Sidebar groups keyed by ``/<name>/``
    """
    sidebar: dict[str, list[SidebarItemDict]] = {}
    for item in tree:
        root = f"/{strip_ext(item.name)}"
        items, _ = _sidebar_items(item.children, root, index_as_folder_link, frontmatter_prefix)
        sidebar[f"{root}/"] = items
    return sidebar


def _sidebar_items(
    children: list[Item], parent_path: str, index_as_folder_link: bool, frontmatter_prefix: str
) -> tuple[list[SidebarItemDict], str | None]:
    """Convert one sibling group.

    Returns:
        Tuple of (entries, link of a folded index document if any)
    """
    entries: list[SidebarItemDict] = []
    folder_link: str | None = None

    for item in children:
        is_index = not item.is_folder and strip_ext(item.name) == INDEX_NAME
        path = f"{parent_path}/" if is_index else f"{parent_path}/{item.name}"

        if is_index and index_as_folder_link:
            folder_link = path
            continue

        text = display_name(item, frontmatter_prefix)
        if item.is_folder:
            items, link = _sidebar_items(item.children, path, index_as_folder_link, frontmatter_prefix)
            entry: SidebarItemDict = {
                "text": text,
                "collapsed": bool(item_option(item, "collapsed", frontmatter_prefix)),
                "items": items,
            }
            if link is not None:
                entry["link"] = link
            entries.append(entry)
        else:
            entries.append({"text": text, "link": strip_ext(path)})

    return entries, folder_link

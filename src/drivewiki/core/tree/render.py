"""Render sidebar trees and heading outlines as markdown."""

import io
from collections.abc import Sequence
from typing import Any

from drivewiki.models.node import OutlineNode, ViewNode

_ITEM_PREFIX = {
    "folder": "",
    "hidden_folder": "(hidden) ",
    "link": "-> ",
    "file": "",
}


def render_view_tree(
    tree: Sequence[ViewNode],
    *,
    active_id: str | None = None,
    collapsed_children: bool = False,
) -> str:
    """Render a materialized tree as an indented bullet list.

    Args:
        tree: Top-level view nodes.
        active_id: Node to mark with ``*``.
        collapsed_children: Also render children of folders that are not expanded.

    Returns:
        Markdown string with bullet-list hierarchy.
    """
    out = io.StringIO()
    _write_view_nodes(out, tree, 0, active_id, collapsed_children)
    return out.getvalue()


def _write_view_nodes(
    out: io.StringIO,
    tree: Sequence[ViewNode],
    depth: int,
    active_id: str | None,
    collapsed_children: bool,
) -> None:
    indent = "    " * depth
    for view in tree:
        marker = ""
        if view.children:
            marker = "[-] " if view.is_expanded else "[+] "
        active = " *" if view.id == active_id else ""
        files = " ..." if view.has_files else ""
        out.write(f"{indent}- {marker}{_ITEM_PREFIX[view.item_type]}{view.label}{files}{active}\n")

        # Inline error marker in place of the children
        if view.error:
            out.write(f"{indent}    - ! {view.error}\n")
            continue

        if view.children and (view.is_expanded or collapsed_children):
            _write_view_nodes(out, view.children, depth + 1, active_id, collapsed_children)


def render_outline(outline: Sequence[OutlineNode], *, depth: int = 0) -> str:
    """Render a heading outline as nested markdown links to the heading anchors."""
    out = io.StringIO()
    indent = "    " * depth
    for node in outline:
        heading = node.heading
        if heading.id:
            out.write(f"{indent}- [{heading.text}](#{heading.id})\n")
        else:
            out.write(f"{indent}- {heading.text}\n")
        out.write(render_outline(node.children, depth=depth + 1))
    return out.getvalue()


def view_tree_as_data(tree: Sequence[ViewNode]) -> list[dict[str, Any]]:
    """Plain dicts for JSON output."""
    data: list[dict[str, Any]] = []
    for view in tree:
        item: dict[str, Any] = {"id": view.id, "label": view.label, "type": view.item_type}
        if view.children:
            item["expanded"] = view.is_expanded
            item["children"] = view_tree_as_data(view.children)
        if view.error:
            item["error"] = view.error
        if view.has_files:
            item["has_files"] = True
        data.append(item)
    return data


def outline_as_data(outline: Sequence[OutlineNode]) -> list[dict[str, Any]]:
    """Plain dicts for JSON output."""
    return [
        {
            "level": node.heading.level,
            "id": node.heading.id,
            "text": node.heading.text,
            "children": outline_as_data(node.children),
        }
        for node in outline
    ]

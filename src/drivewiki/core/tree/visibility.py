"""Decide which children of a folder show up in the sidebar."""

from collections.abc import Collection, Iterable
from dataclasses import dataclass

from drivewiki.models.node import Node


@dataclass(frozen=True)
class VisibleChildren:
    """Children eligible for display, folders first."""

    folders: tuple[Node, ...] = ()
    non_folders: tuple[Node, ...] = ()


def visible_children(
    parent_id: str,
    parent: Node | None,
    children: Iterable[Node],
    show_files: Collection[str],
) -> VisibleChildren:
    """Split a folder's children into displayable folders and files.

    Args:
        parent_id: ID of the folder being listed.
        parent: The folder itself, if its metadata is known.
        children: All children, in store order.
        show_files: Folder IDs whose non-folder files are shown.

    Returns:
        Folders (including folder shortcuts) in store order, and the remaining
        files in store order when ``parent_id`` is in ``show_files``. Both are
        empty when the folder hides its children from the sidebar.
    """
    if parent is not None and not parent.display_settings.display_in_sidebar:
        return VisibleChildren()

    folders: list[Node] = []
    non_folders: list[Node] = []
    for child in children:
        if child.acts_as_folder:
            folders.append(child)
        else:
            non_folders.append(child)

    if parent_id not in show_files:
        non_folders = []

    return VisibleChildren(folders=tuple(folders), non_folders=tuple(non_folders))

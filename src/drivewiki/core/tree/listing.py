"""Content-pane listing of a folder's children."""

from collections.abc import Mapping, Sequence

from drivewiki.models.node import FolderListing, Node


def folder_listing(
    folder_id: str,
    nodes: Mapping[str, Node],
    children: Mapping[str, Sequence[str]],
) -> FolderListing | None:
    """Describe how a folder page shows its children.

    Returns None while the folder's children are unknown. All children are
    listed in store order; the display mode comes from the folder's settings
    (``list`` by default). When the folder holds a README document it is
    picked out, and a ``table`` display is collapsed to ``hide``.
    """
    if folder_id not in children:
        return None

    files = tuple(nodes[child_id] for child_id in children[folder_id] if child_id in nodes)
    folder = nodes.get(folder_id)
    display = "list"
    if folder is not None and folder.display_settings.display_in_content:
        display = folder.display_settings.display_in_content

    readme = next(
        (f for f in files if f.name.lower() == "readme" and not f.acts_as_folder), None
    )
    if readme is not None and display == "table":
        display = "hide"

    return FolderListing(folder_id=folder_id, files=files, display=display, readme=readme)

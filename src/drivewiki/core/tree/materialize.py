"""Materialize the sidebar tree from flat node and adjacency maps."""

from collections.abc import Collection, Mapping, Sequence

from loguru import logger

from drivewiki.core.tree.visibility import visible_children
from drivewiki.models.node import LoadState, Node, SubtreeResult, ViewNode


def node_label(node: Node) -> tuple[str, str]:
    """Return ``(label, item_type)`` for a node.

    item_type is one of ``folder``, ``hidden_folder``, ``link`` or ``file``.
    """
    if node.acts_as_folder:
        if not node.display_settings.display_in_sidebar:
            return node.name, "hidden_folder"
        return node.name, "folder"
    link = node.link
    if link is not None:
        return link.title, "link"
    return node.name, "file"


def _resolve(nodes: Mapping[str, Node], ids: Sequence[str]) -> list[Node]:
    return [nodes[child_id] for child_id in ids if child_id in nodes]


def materialize(
    root_id: str,
    nodes: Mapping[str, Node],
    children: Mapping[str, Sequence[str]],
    show_files: Collection[str],
    *,
    expanded: Collection[str] = (),
    failures: Mapping[str, str] | None = None,
    _ancestors: frozenset[str] = frozenset(),
) -> SubtreeResult:
    """Build the displayable tree below ``root_id``.

    Args:
        root_id: Folder whose children are materialized.
        nodes: Node map, id -> Node.
        children: Adjacency map, folder id -> child ids in store order. A missing
            key means the children have not been fetched yet.
        show_files: Folder IDs whose non-folder files are shown.
        expanded: Expanded folder IDs, copied onto the view nodes.
        failures: Folder id -> error message for failed child fetches.

    Returns:
        UNKNOWN when ``root_id`` has no adjacency entry, FAILED when its fetch
        failed, otherwise LOADED with folders first, then files.
    """
    failures = failures or {}
    if root_id not in children:
        if root_id in failures:
            return SubtreeResult(state=LoadState.FAILED, error=failures[root_id])
        return SubtreeResult(state=LoadState.UNKNOWN)

    ancestors = _ancestors | {root_id}
    visible = visible_children(
        root_id, nodes.get(root_id), _resolve(nodes, children[root_id]), show_files
    )

    folder_views: list[ViewNode] = []
    for folder in visible.folders:
        if folder.id in ancestors:
            logger.debug("Cycle at {} below {}, truncating", folder.id, root_id)
            continue

        sub = materialize(
            folder.id,
            nodes,
            children,
            show_files,
            expanded=expanded,
            failures=failures,
            _ancestors=ancestors,
        )
        label, item_type = node_label(folder)
        has_files = folder.display_settings.display_in_sidebar and any(
            not child.acts_as_folder for child in _resolve(nodes, children.get(folder.id, ()))
        )
        folder_views.append(
            ViewNode(
                id=folder.id,
                label=label,
                item_type=item_type,
                children=sub.nodes or None,
                is_expanded=folder.id in expanded and bool(sub.nodes),
                error=sub.error,
                has_files=has_files,
            )
        )

    file_views = []
    for file in visible.non_folders:
        label, item_type = node_label(file)
        file_views.append(ViewNode(id=file.id, label=label, item_type=item_type))

    return SubtreeResult(state=LoadState.LOADED, nodes=tuple(folder_views + file_views))


def find_view_path(tree: Sequence[ViewNode], node_id: str) -> list[ViewNode] | None:
    """Depth-first search of a materialized tree.

    Returns the view nodes from the top level down to ``node_id``, or None.
    """
    for view in tree:
        if view.id == node_id:
            return [view]
        if view.children:
            path = find_view_path(view.children, node_id)
            if path is not None:
                return [view, *path]
    return None

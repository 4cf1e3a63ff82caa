"""Expansion and file-visibility state of the sidebar tree."""

from collections.abc import Collection, Mapping, Sequence

from loguru import logger

from drivewiki.models.node import Command, FetchChildren, FetchNode, Node


def ancestor_chain(
    node_id: str,
    nodes: Mapping[str, Node],
    root_id: str | None = None,
) -> tuple[list[str], str | None]:
    """Walk parent links up from ``node_id``, stopping at ``root_id``.

    Returns:
        ``(ancestors, missing)``: ancestor ids ordered from the topmost known one
        down to the immediate parent, and the first ancestor id whose node is
        not in ``nodes`` yet (None when the chain reaches a parentless node).
        The root itself has no ancestors.
    """
    if node_id == root_id:
        return [], None
    ancestors: list[str] = []
    seen = {node_id}
    current = nodes.get(node_id)
    while current is not None and current.parent_id is not None:
        parent_id = current.parent_id
        if parent_id in seen:
            logger.debug("Parent cycle at {} above {}", parent_id, node_id)
            break
        seen.add(parent_id)
        ancestors.append(parent_id)
        if parent_id == root_id:
            break
        current = nodes.get(parent_id)
        if current is None:
            ancestors.reverse()
            return ancestors, parent_id
    ancestors.reverse()
    return ancestors, None


class ExpansionState:
    """Which folders are expanded, which show their files, and which node is active.

    Methods never call the store. Anything that needs fetching is returned as a
    list of commands; deduplicating in-flight requests is up to the caller.
    """

    def __init__(self, root_id: str | None = None) -> None:
        self.root_id = root_id
        self.expanded: set[str] = set()
        self.show_files: set[str] = set()
        self.active_id: str | None = None

    def toggle_expand(
        self,
        node_id: str,
        is_now_expanded: bool,
        children: Mapping[str, Sequence[str]],
    ) -> list[Command]:
        """Expand or collapse a folder. Collapsing keeps its show-files flag."""
        if not is_now_expanded:
            self.expanded.discard(node_id)
            return []

        self.expanded.add(node_id)
        if node_id not in children:
            return [FetchChildren(node_id)]
        return []

    def toggle_show_files(self, node_id: str) -> None:
        if node_id in self.show_files:
            self.show_files.discard(node_id)
        else:
            self.show_files.add(node_id)

    def activate(
        self,
        node_id: str,
        nodes: Mapping[str, Node],
        children: Mapping[str, Sequence[str]],
        failed: Collection[str] = (),
    ) -> list[Command]:
        """Make ``node_id`` the active node and expand the way down to it.

        Activating the node that is already active toggles its files instead.
        Unknown ids are ignored.
        """
        if node_id not in nodes:
            return []
        if node_id == self.active_id:
            self.toggle_show_files(node_id)
            return []

        commands = self.reveal(node_id, nodes, children, failed)
        self.active_id = node_id
        return commands

    def reveal(
        self,
        node_id: str,
        nodes: Mapping[str, Node],
        children: Mapping[str, Sequence[str]],
        failed: Collection[str] = (),
    ) -> list[Command]:
        """Expand every known ancestor of ``node_id``.

        Returns fetches for ancestors whose children are unknown, and for the
        first ancestor whose metadata is not loaded yet. Folders in ``failed``
        are expanded but not fetched again.
        """
        if node_id not in nodes:
            return []

        ancestors, missing = ancestor_chain(node_id, nodes, self.root_id)
        commands: list[Command] = []
        if missing is not None:
            commands.append(FetchNode(missing))
        for ancestor_id in ancestors:
            self.expanded.add(ancestor_id)
            if ancestor_id not in children and ancestor_id not in failed:
                commands.append(FetchChildren(ancestor_id))
        return commands

    def reset(self, root_id: str | None = None) -> None:
        """Forget everything, e.g. when switching to another root folder."""
        self.root_id = root_id
        self.expanded.clear()
        self.show_files.clear()
        self.active_id = None

"""Keep expanding towards the active node until it is reachable in the tree."""

from collections.abc import Collection, Mapping, Sequence

from drivewiki.core.state.expansion import ExpansionState, ancestor_chain
from drivewiki.core.tree.materialize import find_view_path
from drivewiki.models.node import Command, Node, ViewNode


def is_revealed(
    node_id: str,
    nodes: Mapping[str, Node],
    children: Mapping[str, Sequence[str]],
    expanded: set[str],
    tree: Sequence[ViewNode] = (),
    root_id: str | None = None,
) -> bool:
    """True when nothing more has to be fetched or expanded to reach ``node_id``.

    That is the case when the node is in the materialized tree below expanded
    folders only, or when its whole ancestor chain is known, expanded and
    loaded, and the parent lists it.
    """
    path = find_view_path(tree, node_id)
    if path is not None and all(view.is_expanded for view in path[:-1]):
        return True
    if node_id not in nodes:
        return False

    ancestors, missing = ancestor_chain(node_id, nodes, root_id)
    if missing is not None:
        return False
    if not ancestors:
        return True
    for ancestor_id in ancestors:
        if ancestor_id not in expanded or ancestor_id not in children:
            return False
    return node_id in children[ancestors[-1]]


class RevealCoordinator:
    """Level-triggered reveal of the active node.

    Call :meth:`on_update` after every change to the node or adjacency maps. While
    the active node is not revealed, it re-runs the reveal step, which expands the
    newly known ancestors and asks for whatever is still missing. Folders in
    ``failures`` are never requested again from here.
    """

    def __init__(self, state: ExpansionState) -> None:
        self.state = state

    def on_update(
        self,
        nodes: Mapping[str, Node],
        children: Mapping[str, Sequence[str]],
        tree: Sequence[ViewNode] = (),
        failures: Collection[str] = (),
    ) -> list[Command]:
        target = self.state.active_id
        if target is None:
            return []
        if is_revealed(
            target, nodes, children, self.state.expanded, tree, root_id=self.state.root_id
        ):
            return []
        return self.state.reveal(target, nodes, children, failures)

"""Navigation session: caches, fetch queue and state for one sidebar."""

from collections import deque
from collections.abc import Iterable

from loguru import logger

from drivewiki.core.state.expansion import ExpansionState
from drivewiki.core.state.reveal import RevealCoordinator
from drivewiki.core.tree.materialize import materialize
from drivewiki.errors import StoreError
from drivewiki.models.node import Command, FetchChildren, FetchNode, Node, SubtreeResult
from drivewiki.protocols import StoreProtocol


def _unique(ids: Iterable[str]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(ids))


class NavigationSession:
    """Own the node and adjacency caches for a root folder and drive fetches.

    Commands produced by the expansion state are queued and executed by
    :meth:`process_pending`. A command is not queued again while it is in
    flight. Every queued command carries the generation it was issued in;
    results for an older generation (a previous root) are dropped.
    """

    def __init__(self, store: StoreProtocol, root_id: str) -> None:
        self.store = store
        self.root_id = root_id
        self.nodes: dict[str, Node] = {}
        self.children: dict[str, tuple[str, ...]] = {}
        self.failures: dict[str, str] = {}
        self.state = ExpansionState(root_id)
        self.reveal = RevealCoordinator(self.state)

        self.generation = 0
        self._queue: deque[tuple[int, Command]] = deque()
        self._in_flight: set[Command] = set()
        self._pending_activation: str | None = None

        self._start_root()

    def _start_root(self) -> None:
        self.dispatch([FetchNode(self.root_id), FetchChildren(self.root_id)])

    # --- Fetch queue ---

    @property
    def pending(self) -> tuple[Command, ...]:
        return tuple(command for _generation, command in self._queue)

    def dispatch(self, commands: Iterable[Command]) -> None:
        """Queue commands, skipping those already in flight."""
        for command in commands:
            if command in self._in_flight:
                continue
            self._in_flight.add(command)
            self._queue.append((self.generation, command))

    def process_pending(self, *, limit: int | None = None) -> int:
        """Execute queued fetches against the store.

        Results may queue follow-up fetches, which are processed in the same
        call. Returns the number of commands executed.
        """
        done = 0
        while self._queue and (limit is None or done < limit):
            generation, command = self._queue.popleft()
            done += 1
            if isinstance(command, FetchChildren):
                try:
                    result = self.store.fetch_children(command.folder_id)
                except StoreError as e:
                    self.fail_children(generation, command.folder_id, str(e))
                    continue
                self.deliver_children(generation, command.folder_id, result)
            else:
                try:
                    node = self.store.fetch_node(command.node_id)
                except StoreError as e:
                    logger.warning("Failed to fetch node {}: {}", command.node_id, e)
                    if generation == self.generation:
                        self._in_flight.discard(command)
                    continue
                self.deliver_node(generation, command.node_id, node)
        return done

    # --- Results ---

    def _is_stale(self, generation: int, what: str) -> bool:
        if generation != self.generation:
            logger.debug("Dropping stale result for {} (generation {})", what, generation)
            return True
        return False

    def deliver_children(self, generation: int, folder_id: str, nodes: list[Node]) -> None:
        if self._is_stale(generation, folder_id):
            return
        self._in_flight.discard(FetchChildren(folder_id))
        for node in nodes:
            self.nodes[node.id] = node
        self.children[folder_id] = _unique(node.id for node in nodes)
        self.failures.pop(folder_id, None)
        self._after_update()

    def deliver_node(self, generation: int, node_id: str, node: Node | None) -> None:
        if self._is_stale(generation, node_id):
            return
        self._in_flight.discard(FetchNode(node_id))
        if node is None:
            logger.debug("Node {} does not exist", node_id)
            return
        self.nodes[node.id] = node
        self._after_update()

    def fail_children(self, generation: int, folder_id: str, error: str) -> None:
        if self._is_stale(generation, folder_id):
            return
        self._in_flight.discard(FetchChildren(folder_id))
        logger.warning("Failed to fetch children of {}: {}", folder_id, error)
        self.failures[folder_id] = error

    def _after_update(self) -> None:
        self.dispatch(
            self.reveal.on_update(self.nodes, self.children, self.tree().nodes, self.failures)
        )

    # --- User actions ---

    def toggle_expand(self, node_id: str, is_now_expanded: bool) -> None:
        if is_now_expanded:
            # An explicit expand is the way to retry a failed folder.
            self.failures.pop(node_id, None)
        self.dispatch(self.state.toggle_expand(node_id, is_now_expanded, self.children))

    def toggle_show_files(self, node_id: str) -> None:
        self.state.toggle_show_files(node_id)

    def activate(self, node_id: str) -> None:
        """Select a node; the sidebar expands down to it as data arrives."""
        if node_id not in self.nodes:
            self.dispatch([FetchNode(node_id)])
            self.state.active_id = node_id
            self._pending_activation = node_id
            return
        if node_id == self._pending_activation:
            # First click that sees the node; select it rather than toggle its files
            self.state.active_id = None
        self._pending_activation = None
        self.dispatch(self.state.activate(node_id, self.nodes, self.children, self.failures))

    def switch_root(self, root_id: str) -> None:
        """Start over with another root folder, dropping outstanding work."""
        logger.info("Switching root {} -> {}", self.root_id, root_id)
        self.generation += 1
        self.root_id = root_id
        self.state.reset(root_id)
        self.failures.clear()
        self._queue.clear()
        self._in_flight.clear()
        self._pending_activation = None
        self._start_root()

    # --- Views ---

    def tree(self) -> SubtreeResult:
        return materialize(
            self.root_id,
            self.nodes,
            self.children,
            self.state.show_files,
            expanded=self.state.expanded,
            failures=self.failures,
        )

"""Protocols for dependency injection in the navigation engine."""

from typing import Any, Protocol, runtime_checkable

from drivewiki.models.node import Node


@runtime_checkable
class ApiProtocol(Protocol):
    """Protocol for Drive API clients."""

    def call(self, path: str, args: dict[str, Any]) -> dict[str, Any]:
        """Invoke an API endpoint and return the JSON response."""
        ...

    def call_text(self, path: str, args: dict[str, Any]) -> str:
        """Invoke an API endpoint and return the raw response body."""
        ...


@runtime_checkable
class StoreProtocol(Protocol):
    """Protocol for the remote file store the sidebar is built from."""

    def fetch_children(self, folder_id: str) -> list[Node]:
        """Return the children of a folder, in store order.

        Raises NotFoundError or PermissionDeniedError.
        """
        ...

    def fetch_node(self, node_id: str) -> Node | None:
        """Return a single node, or None if it does not exist."""
        ...

    def export_html(self, node_id: str) -> str:
        """Return a document exported as HTML."""
        ...

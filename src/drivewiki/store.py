"""Drive-backed implementation of the file store."""

from typing import Any

from loguru import logger

from drivewiki.config import FILE_FIELDS, PAGE_SIZE
from drivewiki.errors import NotFoundError
from drivewiki.models.node import Node
from drivewiki.protocols import ApiProtocol


class DriveStore:
    """Read folders, files and document exports through a Drive API client."""

    def __init__(self, api: ApiProtocol, *, page_size: int = PAGE_SIZE) -> None:
        self._api = api
        self._page_size = page_size

    def fetch_children(self, folder_id: str) -> list[Node]:
        nodes: list[Node] = []
        page_token: str | None = None
        while True:
            args: dict[str, Any] = {
                "q": f"'{folder_id}' in parents and trashed = false",
                "fields": f"nextPageToken, files({FILE_FIELDS})",
                "orderBy": "folder, name",
                "pageSize": self._page_size,
            }
            if page_token:
                args["pageToken"] = page_token
            rv = self._api.call("files", args)
            nodes.extend(Node.from_drive(raw) for raw in rv.get("files", []))
            page_token = rv.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Fetched {} children of {}", len(nodes), folder_id)
        return nodes

    def fetch_node(self, node_id: str) -> Node | None:
        try:
            rv = self._api.call(f"files/{node_id}", {"fields": FILE_FIELDS})
        except NotFoundError:
            logger.debug("Node {} not found", node_id)
            return None
        return Node.from_drive(rv)

    def export_html(self, node_id: str) -> str:
        return self._api.call_text(f"files/{node_id}/export", {"mimeType": "text/html"})

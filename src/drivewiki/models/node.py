"""Domain models for the Drive-backed wiki."""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

FOLDER_MIME_TYPE = "application/vnd.google-apps.folder"
SHORTCUT_MIME_TYPE = "application/vnd.google-apps.shortcut"

DISPLAY_IN_CONTENT_MODES = ("list", "table", "hide")

_MARKDOWN_LINK_RE = re.compile(r"^\s*\[(?P<title>[^\]]+)\]\((?P<url>[^)\s]+)\)\s*$")
_DIRECTIVE_RE = re.compile(r"^\s*(?P<key>[A-Za-z]+)\s*[:=]\s*(?P<value>\S+)\s*$")


class NodeKind(Enum):
    """What a store entry is, as far as the sidebar is concerned."""

    FOLDER = "folder"
    FOLDER_SHORTCUT = "folder_shortcut"
    LINK = "link"
    PLAIN = "plain"


@dataclass(frozen=True)
class MarkdownLink:
    """A file whose name is a markdown link, e.g. ``[Docs](https://example.com)``."""

    title: str
    url: str


def parse_markdown_link(name: str) -> MarkdownLink | None:
    """Parse a ``[title](url)`` file name, or return None."""
    match = _MARKDOWN_LINK_RE.match(name)
    if match is None:
        return None
    return MarkdownLink(title=match["title"].strip(), url=match["url"])


@dataclass(frozen=True)
class ChildrenDisplaySettings:
    """How a folder wants its children shown."""

    display_in_sidebar: bool = True
    display_in_content: str | None = None


def parse_children_display_settings(description: str | None) -> ChildrenDisplaySettings:
    """Read display directives from a folder description.

    One ``key: value`` directive per line, e.g.::

        displayInSidebar: false
        displayInContent: table

    Other lines, unknown keys and invalid values are ignored.
    """
    display_in_sidebar = True
    display_in_content: str | None = None
    for line in (description or "").splitlines():
        match = _DIRECTIVE_RE.match(line)
        if match is None:
            continue
        key, value = match["key"], match["value"].lower()
        if key == "displayInSidebar" and value in ("true", "false"):
            display_in_sidebar = value == "true"
        elif key == "displayInContent" and value in DISPLAY_IN_CONTENT_MODES:
            display_in_content = value
    return ChildrenDisplaySettings(
        display_in_sidebar=display_in_sidebar,
        display_in_content=display_in_content,
    )


@dataclass(frozen=True)
class Node:
    """A single file or folder in the store."""

    id: str
    name: str
    kind: NodeKind
    parent_id: str | None = None
    mime_type: str = ""
    display_settings: ChildrenDisplaySettings = field(default_factory=ChildrenDisplaySettings)

    @property
    def acts_as_folder(self) -> bool:
        return self.kind in (NodeKind.FOLDER, NodeKind.FOLDER_SHORTCUT)

    @property
    def link(self) -> MarkdownLink | None:
        if self.kind is not NodeKind.LINK:
            return None
        return parse_markdown_link(self.name)

    @classmethod
    def from_drive(cls, raw: dict[str, Any]) -> "Node":
        """Build a Node from a Drive v3 file resource."""
        mime_type = raw.get("mimeType", "")
        name = raw.get("name", "")
        kind = NodeKind.PLAIN
        if mime_type == FOLDER_MIME_TYPE:
            kind = NodeKind.FOLDER
        elif (
            mime_type == SHORTCUT_MIME_TYPE
            and raw.get("shortcutDetails", {}).get("targetMimeType") == FOLDER_MIME_TYPE
        ):
            kind = NodeKind.FOLDER_SHORTCUT
        elif parse_markdown_link(name) is not None:
            kind = NodeKind.LINK

        parents = raw.get("parents") or []
        return cls(
            id=raw["id"],
            name=name,
            kind=kind,
            parent_id=parents[0] if parents else None,
            mime_type=mime_type,
            display_settings=parse_children_display_settings(raw.get("description")),
        )


@dataclass(frozen=True)
class ViewNode:
    """One row of the materialized sidebar tree.

    ``children`` is None for leaves; internal nodes always carry at least one child.
    """

    id: str
    label: str
    item_type: str
    children: tuple["ViewNode", ...] | None = None
    is_expanded: bool = False
    error: str | None = None
    has_files: bool = False


class LoadState(Enum):
    """Whether a folder's children are known."""

    UNKNOWN = "unknown"
    LOADED = "loaded"
    FAILED = "failed"


@dataclass(frozen=True)
class SubtreeResult:
    """Materialization result for one folder."""

    state: LoadState
    nodes: tuple[ViewNode, ...] = ()
    error: str | None = None

    @property
    def is_unknown(self) -> bool:
        return self.state is LoadState.UNKNOWN


@dataclass(frozen=True)
class Heading:
    """A document heading, in document order."""

    level: int
    id: str
    text: str


@dataclass
class OutlineNode:
    """A heading together with the headings nested under it."""

    heading: Heading
    children: list["OutlineNode"] = field(default_factory=list)

    @property
    def level(self) -> int:
        return self.heading.level


@dataclass(frozen=True)
class FetchChildren:
    """Command: load the children of a folder."""

    folder_id: str


@dataclass(frozen=True)
class FetchNode:
    """Command: load a single node's metadata."""

    node_id: str


Command = FetchChildren | FetchNode


@dataclass(frozen=True)
class FolderListing:
    """Content-pane view of a folder."""

    folder_id: str
    files: tuple[Node, ...]
    display: str
    readme: Node | None = None

"""Shared test fixtures."""

import pytest

from drivewiki.models.node import Node
from tests.unit.fakes import FakeStore, make_doc, make_folder, make_link, make_shortcut

# root
#   guides/            (folder)
#     howto/           (folder)
#       deploy         (doc)
#     intro            (doc)
#   archive/           (folder, children hidden from the sidebar)
#     old-notes        (doc)
#   shared             (shortcut to a folder)
#   home               (doc)
#   [Status](...)      (link)
WIKI_NODES: list[Node] = [
    make_folder("root", None, name="Wiki"),
    make_folder("guides", "root", name="Guides"),
    make_folder("howto", "guides", name="How-to"),
    make_doc("deploy", "howto", name="Deploying"),
    make_doc("intro", "guides", name="Introduction"),
    make_folder("archive", "root", name="Archive", description="displayInSidebar: false"),
    make_doc("old-notes", "archive", name="Old notes"),
    make_shortcut("shared", "root", name="Shared"),
    make_doc("home", "root", name="Home"),
    make_link("status", "root", "Status", "https://status.example.com"),
]


@pytest.fixture
def wiki_nodes() -> dict[str, Node]:
    return {n.id: n for n in WIKI_NODES}


@pytest.fixture
def wiki_children() -> dict[str, tuple[str, ...]]:
    """Adjacency for the sample wiki with every folder loaded except ``shared``."""
    children: dict[str, list[str]] = {}
    for node in WIKI_NODES:
        if node.acts_as_folder and node.id != "shared":
            children.setdefault(node.id, [])
        if node.parent_id is not None:
            children.setdefault(node.parent_id, []).append(node.id)
    return {k: tuple(v) for k, v in children.items()}


@pytest.fixture
def wiki_store() -> FakeStore:
    return FakeStore(WIKI_NODES)

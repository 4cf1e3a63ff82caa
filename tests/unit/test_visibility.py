"""Tests for choosing which children appear in the sidebar."""

from drivewiki.core.tree.visibility import visible_children
from drivewiki.models.node import Node
from tests.unit.fakes import make_doc, make_folder, make_shortcut


def _children(wiki_nodes: dict[str, Node], ids: tuple[str, ...]) -> list[Node]:
    return [wiki_nodes[i] for i in ids]


def test_folders_only_by_default(
    wiki_nodes: dict[str, Node], wiki_children: dict[str, tuple[str, ...]]
) -> None:
    visible = visible_children(
        "root", wiki_nodes["root"], _children(wiki_nodes, wiki_children["root"]), set()
    )
    assert [n.id for n in visible.folders] == ["guides", "archive", "shared"]
    assert visible.non_folders == ()


def test_show_files_adds_files_after_folders() -> None:
    parent = make_folder("p")
    children = [
        make_doc("d1", "p"),
        make_folder("f1", "p"),
        make_doc("d2", "p"),
        make_folder("f2", "p"),
    ]
    visible = visible_children("p", parent, children, {"p"})
    assert [n.id for n in visible.folders] == ["f1", "f2"]
    assert [n.id for n in visible.non_folders] == ["d1", "d2"]


def test_show_files_of_another_folder_does_not_apply() -> None:
    parent = make_folder("p")
    visible = visible_children("p", parent, [make_doc("d1", "p")], {"other"})
    assert visible.non_folders == ()


def test_folder_shortcut_counts_as_folder() -> None:
    parent = make_folder("p")
    visible = visible_children("p", parent, [make_shortcut("s", "p")], set())
    assert [n.id for n in visible.folders] == ["s"]


def test_hidden_children_ignore_show_files(wiki_nodes: dict[str, Node]) -> None:
    parent = wiki_nodes["archive"]
    children = [wiki_nodes["old-notes"], make_folder("sub", "archive")]
    visible = visible_children("archive", parent, children, {"archive"})
    assert visible.folders == ()
    assert visible.non_folders == ()


def test_unknown_parent_is_displayed() -> None:
    visible = visible_children("p", None, [make_folder("f", "p")], set())
    assert [n.id for n in visible.folders] == ["f"]

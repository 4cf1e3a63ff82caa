"""Tests for materializing the sidebar tree."""

from drivewiki.core.tree.materialize import find_view_path, materialize, node_label
from drivewiki.models.node import LoadState, Node, ViewNode
from tests.unit.fakes import make_doc, make_folder


def _ids(views: tuple[ViewNode, ...] | None) -> list[str]:
    return [v.id for v in views or ()]


def test_unknown_children_give_unknown_state(wiki_nodes: dict[str, Node]) -> None:
    result = materialize("root", wiki_nodes, {}, set())
    assert result.state is LoadState.UNKNOWN
    assert result.is_unknown
    assert result.nodes == ()


def test_failed_fetch_gives_failed_state(wiki_nodes: dict[str, Node]) -> None:
    result = materialize("root", wiki_nodes, {}, set(), failures={"root": "403"})
    assert result.state is LoadState.FAILED
    assert result.error == "403"


def test_confirmed_empty_folder_is_loaded_and_empty() -> None:
    result = materialize("f", {"f": make_folder("f")}, {"f": ()}, set())
    assert result.state is LoadState.LOADED
    assert result.nodes == ()


def test_top_level_lists_folders_only(
    wiki_nodes: dict[str, Node], wiki_children: dict[str, tuple[str, ...]]
) -> None:
    result = materialize("root", wiki_nodes, wiki_children, set())
    assert result.state is LoadState.LOADED
    assert _ids(result.nodes) == ["guides", "archive", "shared"]


def test_nested_folders_and_leaf_rules(
    wiki_nodes: dict[str, Node], wiki_children: dict[str, tuple[str, ...]]
) -> None:
    result = materialize("root", wiki_nodes, wiki_children, set())
    guides, archive, shared = result.nodes

    # guides -> howto; howto only holds a file, so it is a leaf
    assert _ids(guides.children) == ["howto"]
    assert guides.children is not None
    assert guides.children[0].children is None
    # archive hides its children
    assert archive.children is None
    assert archive.item_type == "hidden_folder"
    # shared has not been fetched yet
    assert shared.children is None
    assert shared.error is None


def test_show_files_puts_files_after_folders(
    wiki_nodes: dict[str, Node], wiki_children: dict[str, tuple[str, ...]]
) -> None:
    result = materialize("root", wiki_nodes, wiki_children, {"root", "howto"})
    assert _ids(result.nodes) == ["guides", "archive", "shared", "home", "status"]
    howto = result.nodes[0].children[0]  # type: ignore[index]
    assert _ids(howto.children) == ["deploy"]


def test_labels_and_item_types(
    wiki_nodes: dict[str, Node], wiki_children: dict[str, tuple[str, ...]]
) -> None:
    result = materialize("root", wiki_nodes, wiki_children, {"root"})
    by_id = {v.id: v for v in result.nodes}
    assert (by_id["guides"].label, by_id["guides"].item_type) == ("Guides", "folder")
    assert (by_id["status"].label, by_id["status"].item_type) == ("Status", "link")
    assert (by_id["home"].label, by_id["home"].item_type) == ("Home", "file")
    assert node_label(wiki_nodes["shared"]) == ("Shared", "folder")


def test_expanded_flag_and_file_marker(
    wiki_nodes: dict[str, Node], wiki_children: dict[str, tuple[str, ...]]
) -> None:
    result = materialize("root", wiki_nodes, wiki_children, set(), expanded={"guides", "howto"})
    guides = result.nodes[0]
    assert guides.is_expanded
    assert guides.has_files  # "intro"
    howto = guides.children[0]  # type: ignore[index]
    # Expanded but without visible children: still a plain leaf
    assert not howto.is_expanded
    assert howto.has_files


def test_cycle_is_truncated() -> None:
    nodes = {"a": make_folder("a", "b"), "b": make_folder("b", "a")}
    children = {"a": ("b",), "b": ("a",)}
    result = materialize("a", nodes, children, set())
    assert _ids(result.nodes) == ["b"]
    assert result.nodes[0].children is None


def test_self_loop_is_truncated() -> None:
    nodes = {"a": make_folder("a"), "f": make_folder("f", "a")}
    children = {"a": ("a", "f"), "f": ()}
    result = materialize("a", nodes, children, set())
    assert _ids(result.nodes) == ["f"]


def test_failed_subfolder_keeps_siblings() -> None:
    nodes = {
        "r": make_folder("r"),
        "bad": make_folder("bad", "r"),
        "good": make_folder("good", "r"),
        "sub": make_folder("sub", "good"),
    }
    children = {"r": ("bad", "good"), "good": ("sub",)}
    result = materialize("r", nodes, children, set(), failures={"bad": "permission denied"})
    bad, good = result.nodes
    assert bad.error == "permission denied"
    assert bad.children is None
    assert _ids(good.children) == ["sub"]
    assert good.error is None


def test_child_ids_without_nodes_are_skipped() -> None:
    nodes = {"r": make_folder("r"), "f": make_folder("f", "r")}
    result = materialize("r", nodes, {"r": ("missing", "f")}, set())
    assert _ids(result.nodes) == ["f"]


def test_resolution_is_monotonic() -> None:
    nodes = {"r": make_folder("r"), "d": make_doc("d", "r")}
    children: dict[str, tuple[str, ...]] = {}
    assert materialize("r", nodes, children, set()).is_unknown

    children["r"] = ("d",)
    first = materialize("r", nodes, children, set())
    assert first.state is LoadState.LOADED

    nodes["x"] = make_folder("x")
    children["x"] = ()
    assert materialize("r", nodes, children, set()).state is LoadState.LOADED


def test_find_view_path(
    wiki_nodes: dict[str, Node], wiki_children: dict[str, tuple[str, ...]]
) -> None:
    result = materialize("root", wiki_nodes, wiki_children, {"howto"})
    path = find_view_path(result.nodes, "deploy")
    assert path is not None
    assert [v.id for v in path] == ["guides", "howto", "deploy"]
    assert find_view_path(result.nodes, "intro") is None

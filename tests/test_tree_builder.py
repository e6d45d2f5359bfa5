import os

import pytest

from project_structure_mcp.errors import TraversalDepthError
from project_structure_mcp.tree_builder import TreeBuilder
from project_structure_mcp.types import NodeIndex


def _names(nodes):
    return [n.name for n in nodes]


def test_build_nested_tree(make_project):
    root = make_project(
        {
            "src/app.ts": "",
            "src/components/Button.svelte": "",
            "static/images/logo.png": "",
            "package.json": "{}",
        }
    )
    index = NodeIndex()
    files, dirs = TreeBuilder(root, index, sort_children=True).build(str(root), "root-id")

    assert _names(files) == ["package.json"]
    assert files[0].directory_id == "root-id"
    assert files[0].language == "json"
    assert _names(dirs) == ["src", "static"]

    src, static = dirs
    assert src.parent_id == "root-id"
    assert src.path == "src"
    assert _names(src.child_file_nodes) == ["app.ts"]
    assert src.child_file_nodes[0].path == "src/app.ts"
    assert src.child_file_nodes[0].directory_id == src.id
    components = src.child_directory_nodes[0]
    assert components.path == "src/components"
    assert components.child_file_nodes[0].language == "svelte"
    assert static.child_directory_nodes[0].child_file_nodes[0].path == "static/images/logo.png"

    assert set(index.directories) == {"src", "src/components", "static", "static/images"}
    assert set(index.files) == {
        "package.json",
        "src/app.ts",
        "src/components/Button.svelte",
        "static/images/logo.png",
    }
    assert index.directories["src"] is src


def test_sort_children_orders_by_name(make_project):
    root = make_project({"b.ts": "", "c.js": "", "a.json": "", "z/x.ts": "", "m/y.ts": ""})
    files, dirs = TreeBuilder(root, NodeIndex(), sort_children=True).build(str(root), "r")
    assert _names(files) == ["a.json", "b.ts", "c.js"]
    assert _names(dirs) == ["m", "z"]


def test_unsorted_children_follow_directory_listing(make_project):
    root = make_project({"b.ts": "", "a.ts": "", "c.ts": ""})
    listing = [e.name for e in os.scandir(root)]
    files, _ = TreeBuilder(root, NodeIndex()).build(str(root), "r")
    assert _names(files) == listing


def test_empty_directories_are_kept(make_project):
    root = make_project({"a.ts": ""})
    (root / "empty").mkdir()
    files, dirs = TreeBuilder(root, NodeIndex()).build(str(root), "r")
    assert _names(dirs) == ["empty"]
    assert dirs[0].child_file_nodes == []
    assert dirs[0].child_directory_nodes == []


def test_max_depth_exceeded(make_project):
    root = make_project({"a/b/c/deep.ts": ""})
    builder = TreeBuilder(root, NodeIndex(), max_depth=2)
    with pytest.raises(TraversalDepthError):
        builder.build(str(root), "r")


def test_max_depth_allows_exact_nesting(make_project):
    root = make_project({"a/b/deep.ts": ""})
    _, dirs = TreeBuilder(root, NodeIndex(), max_depth=3).build(str(root), "r")
    assert dirs[0].child_directory_nodes[0].child_file_nodes[0].path == "a/b/deep.ts"


@pytest.mark.skipif(not hasattr(os, "symlink") or os.name == "nt", reason="needs POSIX symlinks")
def test_symlinked_directory_is_listed_not_followed(make_project):
    root = make_project({"real/inner.ts": ""})
    os.symlink(root / "real", root / "link")
    index = NodeIndex()
    files, dirs = TreeBuilder(root, index, sort_children=True).build(str(root), "r")
    assert _names(dirs) == ["real"]
    assert _names(files) == ["link"]
    assert files[0].language == "other"
    assert "link/inner.ts" not in index.files

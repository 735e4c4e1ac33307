"""Tests for folder tree assembly."""

import pytest

from catalog.exceptions import DanglingReferenceError
from catalog.services.tree import build_tree, sort_tree
from catalog.types import NodeTree
from tests.factories import make_node


def names(forest):
    return [node.name for node in forest]


def test_build_tree_nests_and_sorts():
    nodes = [
        make_node("c", "Zeta"),
        make_node("a", "Alpha"),
        make_node("b", "Beta", parent_id="a"),
    ]

    tree = build_tree(nodes)

    assert names(tree) == ["Alpha", "Zeta"]
    assert names(tree[0].children) == ["Beta"]
    assert tree[1].children == []


def test_build_tree_input_order_does_not_matter():
    nodes = [
        make_node("b", "Beta", parent_id="a"),
        make_node("a", "Alpha"),
    ]

    tree = build_tree(nodes)

    assert names(tree) == ["Alpha"]
    assert names(tree[0].children) == ["Beta"]


def test_build_tree_drops_nodes_with_missing_parent():
    nodes = [
        make_node("a", "Alpha"),
        make_node("x", "Orphan", parent_id="gone"),
    ]

    tree = build_tree(nodes)

    assert names(tree) == ["Alpha"]
    assert tree[0].children == []


def test_build_tree_strict_mode_raises_on_missing_parent():
    nodes = [make_node("x", "Orphan", parent_id="gone")]

    with pytest.raises(DanglingReferenceError):
        build_tree(nodes, strict=True)


def test_build_tree_empty_input():
    assert build_tree([]) == []


def test_build_tree_sorts_every_level():
    nodes = [
        make_node("root", "Root"),
        make_node("b", "beta", parent_id="root"),
        make_node("a", "Alpha", parent_id="root"),
        make_node("b2", "zz", parent_id="b"),
        make_node("b1", "aa", parent_id="b"),
    ]

    tree = build_tree(nodes)

    root = tree[0]
    assert names(root.children) == ["Alpha", "beta"]
    assert names(root.children[1].children) == ["aa", "zz"]


def test_build_tree_ignores_case_and_accents_when_ordering():
    nodes = [
        make_node("1", "eclair-2"),
        make_node("2", "Éclair-1"),
        make_node("3", "Delta"),
    ]

    tree = build_tree(nodes)

    assert names(tree) == ["Delta", "Éclair-1", "eclair-2"]


def test_build_tree_copies_fields():
    node = make_node("a", "Alpha", size=None)

    tree = build_tree([node])

    assert isinstance(tree[0], NodeTree)
    assert tree[0].id == "a"
    assert tree[0].created_at == node.created_at


def test_sort_tree_in_place():
    forest = [
        NodeTree.from_node(make_node("b", "b")),
        NodeTree.from_node(make_node("a", "A")),
    ]

    sort_tree(forest)

    assert names(forest) == ["A", "b"]

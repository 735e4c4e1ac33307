"""Tests for shared name ordering helpers."""

from common.types import NodeType, compare_names, name_sort_key, type_rank


def test_name_sort_key_ignores_case_first():
    assert sorted(["beta", "Alpha", "alpha2"], key=name_sort_key) == ["Alpha", "alpha2", "beta"]


def test_name_sort_key_ignores_accents_first():
    assert sorted(["f", "é", "d"], key=name_sort_key) == ["d", "é", "f"]


def test_name_sort_key_is_total_for_case_variants():
    assert sorted(["a", "A"], key=name_sort_key) == sorted(["A", "a"], key=name_sort_key)


def test_compare_names():
    assert compare_names("a", "B") < 0
    assert compare_names("B", "a") > 0
    assert compare_names("same", "same") == 0


def test_type_rank_puts_folders_first():
    assert type_rank(NodeType.FOLDER.value) < type_rank(NodeType.FILE.value)


def test_name_sort_key_puts_lowercase_first_on_case_ties():
    assert sorted(["A", "a"], key=name_sort_key) == ["a", "A"]
    assert sorted(["B", "a", "A", "b"], key=name_sort_key) == ["a", "A", "b", "B"]

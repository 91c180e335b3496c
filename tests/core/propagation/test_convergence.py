"""Tests for the convergence checker."""

from labelprop.core.propagation import LabelGeneration, changed_nodes, has_changed


def test_identical_generations_are_converged():
    previous = LabelGeneration({1: 1, 2: 1}, 3)
    current = LabelGeneration({1: 1, 2: 1}, 4)

    assert not has_changed(previous, current)
    assert changed_nodes(previous, current) == set()


def test_single_label_change_is_detected():
    previous = LabelGeneration({1: 1, 2: 2, 3: 2}, 0)
    current = LabelGeneration({1: 1, 2: 1, 3: 2}, 1)

    assert has_changed(previous, current)
    assert changed_nodes(previous, current) == {2}


def test_different_node_sets_count_as_changed():
    """A node present on one side only is part of the difference."""
    previous = {1: 1, 2: 1}
    current = {1: 1, 3: 1}

    assert has_changed(previous, current)
    assert changed_nodes(previous, current) == {2, 3}


def test_plain_mappings_are_accepted():
    assert not has_changed({}, {})
    assert has_changed({1: 1}, {})

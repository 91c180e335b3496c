"""Tests for label generations and the label store."""

import pytest

from labelprop.core.exceptions import GraphOperationError
from labelprop.core.propagation import LabelGeneration, LabelStore, initial_generation, symmetrize


def test_initial_generation_is_identity():
    """Generation 0 labels every node with itself."""
    generation = initial_generation(symmetrize([(3, 1), (2, 2)]), isolated_nodes=[9])

    assert generation.index == 0
    assert generation.as_dict() == {1: 1, 2: 2, 3: 3, 9: 9}


def test_isolated_node_already_in_edges_is_not_duplicated():
    """Declaring a connected node as isolated changes nothing."""
    generation = initial_generation(symmetrize([(1, 2)]), isolated_nodes=[1])

    assert len(generation) == 2


def test_generation_is_read_only():
    """Published generations cannot be mutated."""
    generation = LabelGeneration({1: 1}, 0)

    with pytest.raises(TypeError):
        generation.labels[1] = 0  # type: ignore[index]


def test_generation_copies_its_input():
    """Changing the source dict does not leak into the generation."""
    source = {1: 1, 2: 2}
    generation = LabelGeneration(source, 0)
    source[2] = 1

    assert generation[2] == 2


def test_successor_applies_updates():
    """Successor keeps untouched nodes and bumps the index."""
    generation = LabelGeneration({1: 1, 2: 2, 3: 3}, 4)
    successor = generation.successor({3: 1})

    assert successor.index == 5
    assert successor.as_dict() == {1: 1, 2: 2, 3: 1}
    assert generation[3] == 3


def test_successor_rejects_unknown_nodes():
    """The node set never grows between generations."""
    generation = LabelGeneration({1: 1}, 0)

    with pytest.raises(GraphOperationError):
        generation.successor({2: 1})


def test_generation_equality_ignores_index():
    """Equality is mapping equality."""
    assert LabelGeneration({1: 1}, 0) == LabelGeneration({1: 1}, 3)
    assert LabelGeneration({1: 1}, 0) != LabelGeneration({1: 0}, 0)


def test_negative_index_rejected():
    with pytest.raises(ValueError):
        LabelGeneration({}, -1)


def test_store_double_buffering():
    """The store holds at most the current and the superseded generation."""
    initial = LabelGeneration({1: 1, 2: 2}, 0)
    store = LabelStore(initial)

    following = initial.successor({2: 1})
    store.publish(following)

    assert store.current is following
    assert store.previous is initial

    store.release_previous()
    assert store.previous is None


def test_store_rejects_out_of_order_generations():
    """Generations are published strictly in order."""
    initial = LabelGeneration({1: 1}, 0)
    store = LabelStore(initial)

    with pytest.raises(GraphOperationError):
        store.publish(LabelGeneration({1: 1}, 2))
    with pytest.raises(GraphOperationError):
        store.publish(initial)
    assert store.current is initial

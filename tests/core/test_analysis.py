"""Tests for component analysis."""

import pytest

from labelprop.core.analysis import ComponentAnalysis
from labelprop.core.exceptions import GraphOperationError
from labelprop.core.models import Edge
from labelprop.core.propagation import compute_connected_components


def test_component_analysis(scenario_a):
    """Test basic component analysis functionality."""
    result = compute_connected_components(
        scenario_a["edges"], 10, isolated_nodes=scenario_a["isolated_nodes"]
    )
    analyzer = ComponentAnalysis(result)

    assert analyzer.get_component_count() == 3
    assert analyzer.get_components() == [{1, 2, 3, 4, 5}, {6, 7}, {8}]
    assert analyzer.get_component_sizes() == {1: 5, 6: 2, 8: 1}
    assert analyzer.get_component(7) == {6, 7}

    assert analyzer.are_connected(2, 5)
    assert analyzer.are_connected(6, 7)
    assert not analyzer.are_connected(1, 6)
    assert not analyzer.are_connected(1, 99)


def test_isolated_nodes():
    """Test detection of isolated nodes."""
    edges = [Edge("A", "B"), Edge("C", "C"), Edge("D", "E")]
    analyzer = ComponentAnalysis(compute_connected_components(edges, 10))

    assert analyzer.get_isolated_nodes() == {"C"}  # Node with only a self-loop is isolated


def test_largest_component():
    """Test finding the largest component."""
    edges = [("A", "B"), ("B", "C"), ("C", "D"), ("X", "Y")]
    analyzer = ComponentAnalysis(compute_connected_components(edges, 10))
    largest = analyzer.get_largest_component()

    assert largest == {"A", "B", "C", "D"}


def test_largest_component_tie_prefers_smallest_id(two_triangles):
    analyzer = ComponentAnalysis(compute_connected_components(two_triangles, 10))

    assert analyzer.get_largest_component() == {1, 2, 3}


def test_empty_result():
    analyzer = ComponentAnalysis(compute_connected_components([], 1))

    assert analyzer.get_largest_component() == set()
    assert analyzer.get_components() == []


def test_unconverged_result_requires_opt_in():
    result = compute_connected_components([(1, 2), (2, 3), (3, 4)], 1)

    with pytest.raises(GraphOperationError):
        ComponentAnalysis(result)
    assert ComponentAnalysis(result, allow_unconverged=True).get_component_count() == 3

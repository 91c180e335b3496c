"""Shared test fixtures."""

import random
from collections import defaultdict, deque
from typing import Any, Callable, Dict, Iterable, List, Set, Tuple

import pytest


def _undirected(edges: Iterable[Tuple[Any, Any]], isolated: Iterable[Any]) -> Dict[Any, Set[Any]]:
    adjacency: Dict[Any, Set[Any]] = defaultdict(set)
    for source, target in edges:
        adjacency[source].add(target)
        adjacency[target].add(source)
    for node in isolated:
        adjacency.setdefault(node, set())
    return adjacency


def _bfs_distances(start: Any, adjacency: Dict[Any, Set[Any]]) -> Dict[Any, int]:
    distances = {start: 0}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for neighbor in adjacency[current]:
            if neighbor not in distances:
                distances[neighbor] = distances[current] + 1
                queue.append(neighbor)
    return distances


def bfs_reference(
    edges: Iterable[Tuple[Any, Any]], isolated: Iterable[Any] = ()
) -> Tuple[Dict[Any, Any], int]:
    """Breadth-first oracle.

    Returns the minimum-id labelling and the number of propagation steps that
    change a label: the largest hop distance from any node to its component
    minimum.
    """
    adjacency = _undirected(edges, isolated)
    labels: Dict[Any, Any] = {}
    settling = 0
    for node in sorted(adjacency):
        if node in labels:
            continue
        # sorted() visits the component minimum first
        distances = _bfs_distances(node, adjacency)
        for member, distance in distances.items():
            labels[member] = node
            settling = max(settling, distance)
    return labels, settling


@pytest.fixture
def reference() -> Callable[..., Tuple[Dict[Any, Any], int]]:
    """Fixture providing the breadth-first labelling oracle."""
    return bfs_reference


@pytest.fixture
def scenario_a() -> Dict[str, Any]:
    """Two components plus an isolated node."""
    return {
        "edges": [(1, 2), (1, 3), (2, 3), (3, 4), (3, 5), (4, 5), (6, 7)],
        "isolated_nodes": [8],
    }


@pytest.fixture
def two_triangles() -> List[Tuple[int, int]]:
    """Two disjoint triangles."""
    return [(1, 2), (2, 3), (1, 3), (4, 5), (5, 6), (4, 6)]


def make_path(order: List[int]) -> List[Tuple[int, int]]:
    """Chain nodes in the given order."""
    return list(zip(order, order[1:]))


@pytest.fixture
def path_edges() -> Callable[[List[int]], List[Tuple[int, int]]]:
    """Fixture building a path graph from a node order."""
    return make_path


def random_graph(seed: int, nodes: int = 60, edges: int = 45) -> List[Tuple[int, int]]:
    """Sparse random multigraph, self-loops and duplicates included."""
    rng = random.Random(seed)
    return [(rng.randrange(nodes), rng.randrange(nodes)) for _ in range(edges)]


@pytest.fixture(params=[1, 7, 42, 1234])
def random_edges(request) -> List[Tuple[int, int]]:
    """Random graphs from a few fixed seeds."""
    return random_graph(request.param)

"""
Graph symmetrization.

Turns a relation of directed pairs into the symmetric adjacency relation every
propagation step joins against. For each input pair ``(u, v)`` the output holds
both ``(u, v)`` and ``(v, u)``. Duplicates and self-loops are kept as rows: the
grouped minimum applied downstream is idempotent, so they never change a label.
"""

from collections import defaultdict
from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Tuple

from ..types import AdjacencyRow


class AdjacencyRelation:
    """
    Immutable, symmetric adjacency relation.

    Rows are kept in input order and also grouped by source node, which is
    the join key of the propagation step. The relation is built once per run
    and shared read-only by every step and every worker.

    Attributes:
        rows (Tuple[AdjacencyRow, ...]): All (source, destination) rows
    """

    __slots__ = ("_rows", "_by_source", "_nodes")

    def __init__(self, rows: Iterable[AdjacencyRow]):
        self._rows: Tuple[AdjacencyRow, ...] = tuple(rows)
        grouped: Dict[Any, List[Any]] = defaultdict(list)
        nodes = set()
        for source, target in self._rows:
            grouped[source].append(target)
            nodes.add(source)
            nodes.add(target)
        self._by_source: Dict[Any, Tuple[Any, ...]] = {
            node: tuple(targets) for node, targets in grouped.items()
        }
        self._nodes: FrozenSet[Any] = frozenset(nodes)

    @property
    def rows(self) -> Tuple[AdjacencyRow, ...]:
        return self._rows

    @property
    def nodes(self) -> FrozenSet[Any]:
        """Every identifier appearing in any row."""
        return self._nodes

    def neighbors(self, node: Any) -> Tuple[Any, ...]:
        """Destinations of every row whose source is ``node``.

        Nodes without rows get an empty tuple rather than an error.
        """
        return self._by_source.get(node, ())

    def __len__(self) -> int:
        return len(self._rows)

    def __iter__(self) -> Iterator[AdjacencyRow]:
        return iter(self._rows)

    def __contains__(self, node: object) -> bool:
        return node in self._nodes

    def __repr__(self) -> str:
        return f"AdjacencyRelation(rows={len(self._rows)}, nodes={len(self._nodes)})"


def _reversed_pairs(edges: Iterable[Any]) -> Iterator[AdjacencyRow]:
    for edge in edges:
        source, target = edge
        yield (source, target)
        yield (target, source)


def symmetrize(edges: Iterable[Any]) -> AdjacencyRelation:
    """Build the symmetric adjacency relation for a set of directed edges.

    Args:
        edges: ``(source, destination)`` pairs or ``Edge`` objects. Already
            undirected input is fine; the extra copies are harmless.

    Returns:
        AdjacencyRelation: Relation holding both orientations of every edge.

    Example:
        >>> relation = symmetrize([(1, 2), (2, 3)])
        >>> sorted(relation.rows)
        [(1, 2), (2, 1), (2, 3), (3, 2)]
    """
    return AdjacencyRelation(_reversed_pairs(edges))

"""
Label generations and the double-buffered label store.

A generation is an immutable node -> label snapshot taken at one iteration.
The store holds at most two live generations: the current one and, until it is
released, the one it superseded. Advancing the store swaps references and never
mutates a published generation.
"""

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Optional

from ..exceptions import GraphOperationError
from .symmetrize import AdjacencyRelation

logger = logging.getLogger(__name__)


class LabelGeneration(Mapping):
    """
    Immutable snapshot of the label assignment at iteration ``index``.

    Behaves as a read-only mapping. Two generations compare equal when they
    hold the same node set with the same label per node, whatever their index.

    Attributes:
        index (int): Iteration number, 0 for the initial assignment
    """

    __slots__ = ("_labels", "_index")

    def __init__(self, labels: Mapping, index: int):
        if index < 0:
            raise ValueError(f"generation index must be non-negative, got {index}")
        self._labels = MappingProxyType(dict(labels))
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    @property
    def labels(self) -> Mapping:
        """Read-only view of the node -> label mapping."""
        return self._labels

    def __getitem__(self, node: Any) -> Any:
        return self._labels[node]

    def __iter__(self) -> Iterator[Any]:
        return iter(self._labels)

    def __len__(self) -> int:
        return len(self._labels)

    def __contains__(self, node: object) -> bool:
        return node in self._labels

    def as_dict(self) -> Dict[Any, Any]:
        """Return a mutable copy of the assignment."""
        return dict(self._labels)

    def successor(self, updates: Mapping) -> "LabelGeneration":
        """Build generation ``index + 1`` from this one plus ``updates``.

        Nodes absent from ``updates`` keep their label. Updates for nodes
        outside this generation are rejected: the node set never changes
        between generations.

        Raises:
            GraphOperationError: If ``updates`` names an unknown node.
        """
        unknown = [node for node in updates if node not in self._labels]
        if unknown:
            raise GraphOperationError(
                f"Cannot label {len(unknown)} node(s) outside generation {self._index}"
            )
        labels = dict(self._labels)
        labels.update(updates)
        return LabelGeneration(labels, self._index + 1)

    def __repr__(self) -> str:
        return f"LabelGeneration(index={self._index}, nodes={len(self._labels)})"


def initial_generation(
    adjacency: AdjacencyRelation, isolated_nodes: Iterable[Any] = ()
) -> LabelGeneration:
    """Create generation 0, where every node is labelled with its own id.

    The node set is the union of every identifier in the adjacency relation
    and the explicitly declared isolated nodes.

    Args:
        adjacency: Symmetric adjacency relation of the run.
        isolated_nodes: Nodes to include even without adjacency rows.

    Returns:
        LabelGeneration: The identity labelling at index 0.
    """
    labels: Dict[Any, Any] = {node: node for node in adjacency.nodes}
    for node in isolated_nodes:
        labels.setdefault(node, node)
    return LabelGeneration(labels, 0)


class LabelStore:
    """
    Double-buffered holder of label generations.

    ``publish`` makes a fully materialized generation current and keeps the
    superseded one readable until ``release_previous`` is called, so a
    convergence check can compare the two. Only the generation directly after
    the current one may be published.
    """

    def __init__(self, initial: LabelGeneration):
        self._current = initial
        self._previous: Optional[LabelGeneration] = None

    @property
    def current(self) -> LabelGeneration:
        return self._current

    @property
    def previous(self) -> Optional[LabelGeneration]:
        return self._previous

    def publish(self, generation: LabelGeneration) -> None:
        """Swap ``generation`` in as the current generation.

        Raises:
            GraphOperationError: If generations would be skipped or reordered.
        """
        expected = self._current.index + 1
        if generation.index != expected:
            raise GraphOperationError(
                f"Expected generation {expected}, got generation {generation.index}"
            )
        self._previous = self._current
        self._current = generation
        logger.debug(f"Published generation {generation.index}")

    def release_previous(self) -> None:
        """Drop the superseded generation."""
        self._previous = None

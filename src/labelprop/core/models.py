"""
Domain models for connected component labelling.

This module defines the value objects exchanged with callers of the
propagation kernel: the directed edge accepted on input and the result record
returned by the iteration driver.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Set, Tuple

from .enums import TerminationReason


@dataclass(frozen=True)
class Edge:
    """
    Directed pair of node identifiers denoting an undirected connection.

    Edges unpack like tuples, so ``Edge`` instances and plain ``(u, v)`` pairs
    can be mixed freely wherever edges are accepted.

    Attributes:
        source (Any): Source node ID
        target (Any): Destination node ID
    """

    source: Any
    target: Any

    def __post_init__(self):
        """Validate edge endpoints after initialization."""
        if self.source is None or self.target is None:
            raise ValueError("edge endpoints must not be None")

    def __iter__(self) -> Iterator[Any]:
        yield self.source
        yield self.target


@dataclass(frozen=True)
class ComponentResult:
    """
    Outcome of a bounded label propagation run.

    ``converged`` is only true for a certified fixed point. Exhausted and
    cancelled runs still carry the last complete generation, which is a lower
    bound on the final labelling rather than the answer itself.

    Attributes:
        assignment (Mapping[Any, Any]): Read-only node -> component id mapping
        converged (bool): Whether a fixed point was certified
        iterations_used (int): Propagation steps executed, confirming step included
        settled_after (int): Propagation steps that changed at least one label
        reason (TerminationReason): Terminal state of the driver
        history (Tuple[int, ...]): Changed-node count of every executed step
    """

    assignment: Mapping[Any, Any]
    converged: bool
    iterations_used: int
    settled_after: int
    reason: TerminationReason
    history: Tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Freeze the assignment and check the termination flags agree."""
        if not isinstance(self.assignment, MappingProxyType):
            object.__setattr__(self, "assignment", MappingProxyType(dict(self.assignment)))
        if self.converged != self.reason.is_certified:
            raise ValueError(f"converged={self.converged} contradicts reason {self.reason.value}")
        if self.iterations_used < 0 or self.settled_after > self.iterations_used:
            raise ValueError("settled_after must lie between 0 and iterations_used")

    def components(self) -> Dict[Any, Set[Any]]:
        """Group nodes by component id."""
        grouped: Dict[Any, Set[Any]] = {}
        for node, label in self.assignment.items():
            grouped.setdefault(label, set()).add(node)
        return grouped

    @property
    def component_count(self) -> int:
        """Number of distinct labels in the assignment."""
        return len(set(self.assignment.values()))

    def component_of(self, node: Any) -> Any:
        """Return the component id of ``node``.

        Raises:
            KeyError: If the node was not part of the run.
        """
        return self.assignment[node]

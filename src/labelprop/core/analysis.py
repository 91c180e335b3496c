"""Component analysis over a propagation result."""

from typing import Any, Dict, List, Set

from .exceptions import GraphOperationError
from .models import ComponentResult


class ComponentAnalysis:
    """
    Analyzes the connected components of a labelling.

    This class groups the nodes of a ``ComponentResult`` by component id and
    answers membership, size and isolation queries. Analysing a run that did
    not converge is refused unless explicitly allowed, since its labels may
    split real components.
    """

    def __init__(self, result: ComponentResult, allow_unconverged: bool = False):
        """Initialize component analyzer with a propagation result."""
        if not result.converged and not allow_unconverged:
            raise GraphOperationError(
                f"Cannot analyse components of a {result.reason.value} run"
            )
        self.result = result
        self.components: Dict[Any, Set[Any]] = result.components()  # component id -> nodes
        self.component_sizes: Dict[Any, int] = {
            label: len(members) for label, members in self.components.items()
        }

    def get_components(self) -> List[Set[Any]]:
        """Get list of all components, ordered by component id."""
        return [set(self.components[label]) for label in sorted(self.components)]

    def get_component_count(self) -> int:
        """Get number of connected components."""
        return len(self.components)

    def get_component(self, node: Any) -> Set[Any]:
        """Get the members of the component containing ``node``."""
        return set(self.components[self.result.component_of(node)])

    def get_component_sizes(self) -> Dict[Any, int]:
        """Map each component id to its number of nodes."""
        return dict(self.component_sizes)

    def get_isolated_nodes(self) -> Set[Any]:
        """Get nodes forming a component on their own."""
        return {
            next(iter(members)) for members in self.components.values() if len(members) == 1
        }

    def are_connected(self, node1: Any, node2: Any) -> bool:
        """Check if two nodes are in the same component."""
        assignment = self.result.assignment
        if node1 not in assignment or node2 not in assignment:
            return False
        return assignment[node1] == assignment[node2]

    def get_largest_component(self) -> Set[Any]:
        """Get the largest connected component.

        Ties are broken towards the smallest component id.
        """
        if not self.component_sizes:
            return set()
        largest_id = min(
            self.component_sizes, key=lambda label: (-self.component_sizes[label], label)
        )
        return set(self.components[largest_id])

"""
Min-label propagation kernel.

Connected components computed with bulk set operations only: symmetrize the
edges once, start from the identity labelling, and repeat a join plus grouped
minimum until two consecutive generations are identical or the cap is hit.
"""

from .convergence import changed_nodes, has_changed
from .driver import (
    PropagationDriver,
    compute_connected_components,
    compute_connected_components_async,
    is_fixed_point,
)
from .labels import LabelGeneration, LabelStore, initial_generation
from .step import frontier_candidates, propagate, propagate_frontier
from .symmetrize import AdjacencyRelation, symmetrize

__all__ = [
    "AdjacencyRelation",
    "LabelGeneration",
    "LabelStore",
    "PropagationDriver",
    "changed_nodes",
    "compute_connected_components",
    "compute_connected_components_async",
    "frontier_candidates",
    "has_changed",
    "initial_generation",
    "is_fixed_point",
    "propagate",
    "propagate_frontier",
    "symmetrize",
]

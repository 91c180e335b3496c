"""
One synchronous label propagation step.

Relationally the step is a join followed by a grouped minimum::

    neighbour_min(n) = MIN(L_k(m))  over rows (n, m) of the adjacency relation
    L_{k+1}(n)       = MIN(L_k(n), neighbour_min(n))

A node without adjacency rows has no neighbour contribution and keeps its
label. Every node reads only generation ``k``, which is never mutated, so nodes
can be evaluated in any order and in parallel. Generation ``k + 1`` is built in
full before it is returned.
"""

import logging
from functools import partial
from typing import Any, Dict, Iterable, Mapping, Optional, Sequence, Set

from ..exceptions import GraphOperationError, ResourceExhaustedError
from .labels import LabelGeneration
from .symmetrize import AdjacencyRelation
from ...infrastructure.executor import PartitionedExecutor

logger = logging.getLogger(__name__)


def _relax_partition(
    adjacency: AdjacencyRelation, labels: Mapping, nodes: Sequence[Any]
) -> Dict[Any, Any]:
    """Compute the new label of every node in ``nodes``.

    Only nodes whose label decreases are returned.
    """
    updates: Dict[Any, Any] = {}
    for node in nodes:
        current = labels[node]
        best = current
        for neighbor in adjacency.neighbors(node):
            candidate = labels[neighbor]
            if candidate < best:
                best = candidate
        if best != current:
            updates[node] = best
    return updates


def _evaluate(
    adjacency: AdjacencyRelation,
    generation: LabelGeneration,
    nodes: Sequence[Any],
    executor: Optional[PartitionedExecutor],
) -> LabelGeneration:
    runner = executor or PartitionedExecutor()
    relax = partial(_relax_partition, adjacency, generation.labels)
    try:
        partial_updates = runner.map_partitions(relax, nodes)
    except MemoryError as e:
        logger.error(f"Out of memory computing generation {generation.index + 1}")
        raise ResourceExhaustedError(
            f"Out of memory computing generation {generation.index + 1}"
        ) from e
    except KeyError as e:
        raise GraphOperationError(
            f"Adjacency references node {e.args[0]!r} missing from generation {generation.index}"
        ) from e
    except TypeError as e:
        raise GraphOperationError(f"Labels are not comparable: {str(e)}") from e
    finally:
        if executor is None:
            runner.shutdown()

    updates: Dict[Any, Any] = {}
    for chunk in partial_updates:
        updates.update(chunk)
    return generation.successor(updates)


def propagate(
    adjacency: AdjacencyRelation,
    generation: LabelGeneration,
    executor: Optional[PartitionedExecutor] = None,
) -> LabelGeneration:
    """Advance every node by one relaxation hop.

    Args:
        adjacency: Symmetric adjacency relation of the run.
        generation: Generation ``k``, read but never modified.
        executor: Optional executor evaluating node partitions in parallel.

    Returns:
        LabelGeneration: Generation ``k + 1``.

    Raises:
        GraphOperationError: If the step cannot be computed.
        ResourceExhaustedError: If memory runs out during the step.

    Example:
        >>> adjacency = symmetrize([(1, 2), (2, 3)])
        >>> step = propagate(adjacency, initial_generation(adjacency))
        >>> step.as_dict()
        {1: 1, 2: 1, 3: 2}
    """
    return _evaluate(adjacency, generation, list(generation), executor)


def frontier_candidates(adjacency: AdjacencyRelation, changed: Iterable[Any]) -> Set[Any]:
    """Nodes whose label can move in the step after ``changed`` moved.

    A node can only decrease if one of its neighbours decreased in the previous
    step, so the candidates are the neighbours of the changed nodes. The
    relation is symmetric, so outgoing rows of a changed node name exactly the
    nodes that read its label.
    """
    candidates: Set[Any] = set()
    for node in changed:
        candidates.update(adjacency.neighbors(node))
    return candidates


def propagate_frontier(
    adjacency: AdjacencyRelation,
    generation: LabelGeneration,
    changed: Optional[Iterable[Any]],
    executor: Optional[PartitionedExecutor] = None,
) -> LabelGeneration:
    """Advance only the nodes reachable in one hop from the last changes.

    Produces exactly the generation ``propagate`` would, while skipping nodes
    whose neighbourhood was stable in the previous step.

    Args:
        adjacency: Symmetric adjacency relation of the run.
        generation: Generation ``k``.
        changed: Nodes whose label changed between ``k - 1`` and ``k``, or None
            for the first step, which evaluates every node.
        executor: Optional parallel executor.

    Returns:
        LabelGeneration: Generation ``k + 1``.
    """
    if changed is None:
        return propagate(adjacency, generation, executor)
    nodes = [node for node in frontier_candidates(adjacency, changed) if node in generation]
    logger.debug(f"Frontier step over {len(nodes)} of {len(generation)} nodes")
    return _evaluate(adjacency, generation, nodes, executor)

"""
Bounded iteration driver for min-label propagation.

The driver alternates propagation steps and convergence checks until the labels
stop moving or the iteration cap is hit::

    Running --(no label changed)----------------> Converged
    Running --(cap reached, labels still moving)--> Exhausted
    Running --(cancel requested between steps)---> Cancelled

All loop state lives in a per-run ``_RunState`` and is only exposed through the
returned ``ComponentResult``. Each step reads the current generation and builds
the next one in full before it is published, so steps are separated by a
barrier even when their work runs on several threads.
"""

import asyncio
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Set

from ..config import PropagationConfig
from ..enums import TerminationReason
from ..exceptions import GraphOperationError, InvariantViolationError
from ..models import ComponentResult
from ..types import GenerationListener
from .convergence import changed_nodes, has_changed
from .labels import LabelGeneration, LabelStore, initial_generation
from .step import propagate, propagate_frontier
from .symmetrize import AdjacencyRelation, symmetrize
from ...infrastructure.executor import PartitionedExecutor
from ...infrastructure.memory import MemoryManager

logger = logging.getLogger(__name__)


@dataclass
class _RunState:
    """Driver-local loop state of a single run."""

    store: LabelStore
    iterations: int = 0
    settled_after: int = 0
    unconverged: bool = True
    changed: Optional[Set[Any]] = None
    history: List[int] = field(default_factory=list)
    reason: Optional[TerminationReason] = None
    memory: Optional[MemoryManager] = None


def is_fixed_point(adjacency: AdjacencyRelation, generation: LabelGeneration) -> bool:
    """Return True if one more step would leave ``generation`` unchanged."""
    return not has_changed(generation, propagate(adjacency, generation))


class PropagationDriver:
    """
    Runs min-label propagation over an edge set until a fixed point or the cap.

    The adjacency relation is symmetrized once in the constructor and shared
    read-only by every step. A driver can be run several times; every run
    starts again from generation 0.

    Attributes:
        adjacency (AdjacencyRelation): Symmetric adjacency relation
        config (PropagationConfig): Run configuration
        isolated_nodes (tuple): Nodes declared without edges
    """

    def __init__(
        self,
        edges: Iterable[Any],
        config: PropagationConfig,
        isolated_nodes: Iterable[Any] = (),
        cancel_event: Optional[threading.Event] = None,
    ):
        """
        Initialize the driver.

        Args:
            edges: Directed or undirected ``(u, v)`` pairs or ``Edge`` objects
            config: Run configuration, including the iteration cap
            isolated_nodes: Extra nodes that appear in no edge
            cancel_event: Event checked between generations to stop early
        """
        self.config = config
        self.adjacency = symmetrize(edges)
        self.isolated_nodes = tuple(isolated_nodes)
        self._cancel_event = cancel_event or threading.Event()
        self._listeners: List[GenerationListener] = []

    def add_listener(self, listener: GenerationListener) -> None:
        """Register a listener called after each published generation."""
        self._listeners.append(listener)

    def remove_listener(self, listener: GenerationListener) -> None:
        """Unregister a listener."""
        self._listeners.remove(listener)

    def cancel(self) -> None:
        """Request the run to stop at the next generation boundary."""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def _start(self) -> _RunState:
        initial = initial_generation(self.adjacency, self.isolated_nodes)
        memory = (
            MemoryManager(self.config.max_memory_mb)
            if self.config.max_memory_mb is not None
            else None
        )
        logger.debug(
            f"Starting propagation over {len(initial)} nodes and "
            f"{len(self.adjacency)} adjacency rows (cap {self.config.max_iterations})"
        )
        return _RunState(store=LabelStore(initial), memory=memory)

    def _running(self, state: _RunState) -> bool:
        if state.reason is not None:
            return False
        if self.cancelled:
            state.reason = TerminationReason.CANCELLED
            return False
        return True

    def _step(self, state: _RunState, executor: PartitionedExecutor) -> LabelGeneration:
        current = state.store.current
        if self.config.track_frontier:
            return propagate_frontier(self.adjacency, current, state.changed, executor)
        return propagate(self.adjacency, current, executor)

    def _check_monotonic(
        self, previous: LabelGeneration, current: LabelGeneration, changed: Set[Any]
    ) -> None:
        for node in changed:
            if not current[node] < previous[node]:
                raise InvariantViolationError(
                    f"Label of node {node!r} rose from {previous[node]!r} to "
                    f"{current[node]!r} in generation {current.index}"
                )

    def _advance(self, state: _RunState, next_generation: LabelGeneration) -> None:
        previous = state.store.current
        state.iterations += 1
        changed = changed_nodes(previous, next_generation)
        state.unconverged = bool(changed)

        if self.config.check_monotonic and changed:
            self._check_monotonic(previous, next_generation, changed)

        state.store.publish(next_generation)
        state.store.release_previous()
        state.changed = changed
        state.history.append(len(changed))
        if changed:
            state.settled_after += 1

        logger.debug(f"Generation {next_generation.index}: {len(changed)} label(s) changed")
        for listener in self._listeners:
            listener.on_generation(next_generation.index, next_generation, len(changed))

        if state.memory is not None:
            state.memory.check_memory()

        if not state.unconverged:
            state.reason = TerminationReason.CONVERGED
        elif state.iterations >= self.config.max_iterations:
            state.reason = TerminationReason.EXHAUSTED

    def _finish(self, state: _RunState) -> ComponentResult:
        reason = state.reason or TerminationReason.CANCELLED
        result = ComponentResult(
            assignment=state.store.current.labels,
            converged=reason is TerminationReason.CONVERGED,
            iterations_used=state.iterations,
            settled_after=state.settled_after,
            reason=reason,
            history=tuple(state.history),
        )
        if reason is TerminationReason.CONVERGED:
            logger.info(
                f"Converged after {state.iterations} iteration(s): "
                f"{result.component_count} component(s)"
            )
        elif reason is TerminationReason.EXHAUSTED:
            logger.warning(
                f"Iteration cap {self.config.max_iterations} reached before convergence; "
                f"labels are a lower bound"
            )
        else:
            logger.warning(f"Propagation cancelled after {state.iterations} iteration(s)")
        if state.memory is not None:
            logger.debug(f"Peak resident memory {state.memory.peak_memory_mb:.1f}MB")
        return result

    def _executor(self) -> PartitionedExecutor:
        return PartitionedExecutor(self.config.max_workers, self.config.partition_size)

    def run(self) -> ComponentResult:
        """Run propagation to a terminal state.

        Returns:
            ComponentResult: Final labels, termination reason and counters.

        Raises:
            GraphOperationError: If a step fails; nothing from it is published.
            InvariantViolationError: If monotonicity checking is on and a label rose.
            ResourceExhaustedError: If the memory budget is exceeded.
        """
        state = self._start()
        with self._executor() as executor:
            while self._running(state):
                step = state.iterations + 1
                try:
                    self._advance(state, self._step(state, executor))
                except GraphOperationError as e:
                    logger.error(f"Step {step} failed: {str(e)}")
                    raise
        return self._finish(state)

    async def run_async(self) -> ComponentResult:
        """Run propagation without blocking the event loop.

        Each step runs in the loop's default executor and is awaited in full
        before the convergence check, so the event loop stays responsive while
        generations remain strictly ordered. If the awaiting task is cancelled,
        the driver is cancelled too and the in-flight step is awaited before
        the cancellation propagates, so no step outlives the run.
        """
        loop = asyncio.get_running_loop()
        state = self._start()
        with self._executor() as executor:
            while self._running(state):
                step = state.iterations + 1
                future = loop.run_in_executor(None, self._step, state, executor)
                try:
                    self._advance(state, await asyncio.shield(future))
                except asyncio.CancelledError:
                    logger.warning(f"Run cancelled during step {step}; waiting for it to finish")
                    self.cancel()
                    await asyncio.wait({future})
                    raise
                except GraphOperationError as e:
                    logger.error(f"Step {step} failed: {str(e)}")
                    raise
        return self._finish(state)


def _build_driver(
    edges: Iterable[Any],
    max_iterations: int,
    isolated_nodes: Iterable[Any],
    config: Optional[PropagationConfig],
    cancel_event: Optional[threading.Event],
    listeners: Iterable[GenerationListener],
) -> PropagationDriver:
    if config is None:
        config = PropagationConfig(max_iterations=max_iterations)
    else:
        config = config.with_max_iterations(max_iterations)
    driver = PropagationDriver(edges, config, isolated_nodes, cancel_event)
    for listener in listeners:
        driver.add_listener(listener)
    return driver


def compute_connected_components(
    edges: Iterable[Any],
    max_iterations: int,
    isolated_nodes: Iterable[Any] = (),
    *,
    config: Optional[PropagationConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    listeners: Iterable[GenerationListener] = (),
) -> ComponentResult:
    """Label every node with the minimum node id of its connected component.

    Args:
        edges: ``(u, v)`` pairs or ``Edge`` objects; duplicates and self-loops
            are allowed.
        max_iterations: Required safety cap on propagation steps.
        isolated_nodes: Nodes without edges that must still be labelled.
        config: Optional configuration; its cap is replaced by ``max_iterations``.
        cancel_event: Optional event to stop the run between generations.
        listeners: Objects notified after each generation.

    Returns:
        ComponentResult: ``converged`` is False when the cap or a cancellation
        ended the run, in which case the labels are only a lower bound.

    Raises:
        ConfigurationError: If ``max_iterations`` or ``config`` is invalid.
        GraphOperationError: If a propagation step fails.

    Example:
        >>> result = compute_connected_components([(1, 2), (3, 4)], max_iterations=10)
        >>> dict(result.assignment)
        {1: 1, 2: 1, 3: 3, 4: 3}
    """
    driver = _build_driver(edges, max_iterations, isolated_nodes, config, cancel_event, listeners)
    return driver.run()


async def compute_connected_components_async(
    edges: Iterable[Any],
    max_iterations: int,
    isolated_nodes: Iterable[Any] = (),
    *,
    config: Optional[PropagationConfig] = None,
    cancel_event: Optional[threading.Event] = None,
    listeners: Iterable[GenerationListener] = (),
) -> ComponentResult:
    """Awaitable variant of ``compute_connected_components``."""
    driver = _build_driver(edges, max_iterations, isolated_nodes, config, cancel_event, listeners)
    return await driver.run_async()

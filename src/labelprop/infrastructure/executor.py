"""
Partitioned execution of data-parallel work.

Work inside one propagation step is independent per node, so the node set is
cut into partitions that a thread pool evaluates concurrently. ``map_partitions``
returns only after every partition has finished, which is the barrier between
two generations: no caller ever sees the results of a partially evaluated step.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from ..core.config import DEFAULT_PARTITION_SIZE

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")


class PartitionedExecutor:
    """
    Evaluates a function over fixed-size partitions of a sequence.

    With a single worker the partitions run inline on the calling thread and no
    pool is created.

    Attributes:
        max_workers (int): Number of worker threads
        partition_size (int): Maximum items per partition
    """

    def __init__(self, max_workers: int = 1, partition_size: int = DEFAULT_PARTITION_SIZE):
        """
        Initialize the executor.

        Args:
            max_workers: Number of worker threads, 1 for inline execution
            partition_size: Maximum number of items handed to one call
        """
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if partition_size < 1:
            raise ValueError("partition_size must be at least 1")
        self.max_workers = max_workers
        self.partition_size = partition_size
        self._pool: Optional[ThreadPoolExecutor] = (
            ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="labelprop")
            if max_workers > 1
            else None
        )

    def partitions(self, items: Sequence[T]) -> List[Tuple[T, ...]]:
        """Cut ``items`` into consecutive partitions."""
        size = self.partition_size
        return [tuple(items[start : start + size]) for start in range(0, len(items), size)]

    def map_partitions(self, func: Callable[[Tuple[T, ...]], R], items: Sequence[T]) -> List[R]:
        """Apply ``func`` to every partition and wait for all of them.

        Results come back in partition order. If any partition fails, the
        first failure is re-raised after every partition has finished.

        Args:
            func: Pure function of one partition
            items: Items to partition

        Returns:
            List[R]: One result per partition
        """
        parts = self.partitions(items)
        if self._pool is None or len(parts) <= 1:
            return [func(part) for part in parts]

        futures = [self._pool.submit(func, part) for part in parts]
        wait(futures)
        logger.debug(f"Evaluated {len(parts)} partitions on {self.max_workers} workers")
        return [future.result() for future in futures]

    def shutdown(self) -> None:
        """Release worker threads."""
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None

    def __enter__(self) -> "PartitionedExecutor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()

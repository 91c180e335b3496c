"""
Memory budget enforcement for propagation runs.

Resident memory is sampled with ``psutil`` at generation boundaries. When growth
since the start of the run exceeds the budget, garbage is collected once more
and the run is aborted with ``ResourceExhaustedError`` if it is still over.
"""

import gc
import logging
import os
import time
from typing import Optional

import psutil  # type: ignore # Missing stubs

from ..core.exceptions import ResourceExhaustedError

logger = logging.getLogger(__name__)


def get_memory_usage() -> int:
    """Get current memory usage in bytes."""
    process = psutil.Process(os.getpid())
    mem_info = process.memory_info()
    return int(mem_info.rss)


class MemoryManager:
    """Tracks resident memory growth against an optional budget."""

    def __init__(self, max_memory_mb: Optional[float] = None, check_interval: float = 0.0):
        """Initialize memory manager.

        Args:
            max_memory_mb: Allowed growth in megabytes, None to only track peaks
            check_interval: Minimum seconds between two samples
        """
        gc.collect()

        self.max_memory = max_memory_mb * 1024 * 1024 if max_memory_mb else None
        self.start_memory = get_memory_usage()
        self._peak_memory = self.start_memory
        self._last_check = float("-inf")
        self._check_interval = check_interval

    def check_memory(self) -> None:
        """Check if memory growth exceeds the budget.

        Raises:
            ResourceExhaustedError: If growth stays above budget after collection.
        """
        current_time = time.monotonic()
        if self._check_interval and current_time - self._last_check < self._check_interval:
            return
        self._last_check = current_time

        current = get_memory_usage()
        self._peak_memory = max(self._peak_memory, current)
        if not self.max_memory:
            return

        if current - self.start_memory > self.max_memory:
            gc.collect()
            current = get_memory_usage()

            if current - self.start_memory > self.max_memory:
                logger.error(
                    f"Memory growth {(current - self.start_memory)/1024/1024:.1f}MB exceeds "
                    f"budget of {self.max_memory/1024/1024:.1f}MB"
                )
                raise ResourceExhaustedError(
                    f"Memory usage {current/1024/1024:.1f}MB exceeds "
                    f"limit of {self.max_memory/1024/1024:.1f}MB over baseline"
                )

    @property
    def peak_memory_mb(self) -> float:
        """Get peak memory usage in MB."""
        return self._peak_memory / 1024 / 1024

"""
Run configuration for the iteration driver.

The iteration cap is a safety bound, not a tuning knob for correctness: it has
no default here and must be supplied by the caller. Surrounding tools pick
their own default (the CLI uses ``DEFAULT_MAX_ITERATIONS``).
"""

from dataclasses import dataclass, replace
from typing import Optional

from .exceptions import ConfigurationError

# Default cap used by the command line tool, never by the kernel itself.
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_PARTITION_SIZE = 10_000


def _require_positive_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{name} must be an integer, got {type(value).__name__}")
    if value < 1:
        raise ConfigurationError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class PropagationConfig:
    """
    Configuration for a bounded propagation run.

    Attributes:
        max_iterations (int): Hard cap on propagation steps
        max_workers (int): Threads evaluating node partitions within one step
        partition_size (int): Nodes per parallel work unit
        track_frontier (bool): Only recompute neighbours of nodes that changed
        max_memory_mb (Optional[float]): Resident memory growth budget
        check_monotonic (bool): Verify labels never increase between generations
    """

    max_iterations: int
    max_workers: int = 1
    partition_size: int = DEFAULT_PARTITION_SIZE
    track_frontier: bool = False
    max_memory_mb: Optional[float] = None
    check_monotonic: bool = False

    def __post_init__(self):
        """Validate configuration values."""
        _require_positive_int("max_iterations", self.max_iterations)
        _require_positive_int("max_workers", self.max_workers)
        _require_positive_int("partition_size", self.partition_size)
        if self.max_memory_mb is not None:
            if isinstance(self.max_memory_mb, bool) or not isinstance(
                self.max_memory_mb, (int, float)
            ):
                raise ConfigurationError("max_memory_mb must be a number")
            if self.max_memory_mb <= 0:
                raise ConfigurationError(
                    f"max_memory_mb must be positive, got {self.max_memory_mb}"
                )

    @property
    def parallel(self) -> bool:
        return self.max_workers > 1

    def with_max_iterations(self, max_iterations: int) -> "PropagationConfig":
        """Return a copy with a different iteration cap."""
        return replace(self, max_iterations=max_iterations)

"""Infrastructure for running propagation: executors, memory guards and loaders."""

from .executor import PartitionedExecutor
from .memory import MemoryManager, get_memory_usage

__all__ = ["MemoryManager", "PartitionedExecutor", "get_memory_usage"]

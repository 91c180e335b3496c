"""
Core type definitions and protocols.

Node identifiers are opaque values that only need to be hashable and totally
ordered among themselves; they are typed as ``Any`` throughout.
"""

from typing import Any, Protocol, Tuple

# A single adjacency row (source, destination).
AdjacencyRow = Tuple[Any, Any]


class GenerationListener(Protocol):
    """Protocol for objects notified after each published generation."""

    def on_generation(self, index: int, generation: Any, changed_count: int) -> None:
        """Called once generation ``index`` is complete and published."""
        ...

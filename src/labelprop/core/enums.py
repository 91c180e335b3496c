"""Enumerations shared across the propagation kernel."""

from enum import Enum


class TerminationReason(str, Enum):
    """Why an iteration driver stopped."""

    CONVERGED = "converged"  # fixed point certified
    EXHAUSTED = "exhausted"  # iteration cap reached while labels still moved
    CANCELLED = "cancelled"  # cooperative cancellation at a generation boundary

    @property
    def is_certified(self) -> bool:
        """Whether the labels are the final component assignment."""
        return self is TerminationReason.CONVERGED

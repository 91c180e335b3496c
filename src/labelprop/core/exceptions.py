"""
Custom exceptions for the label propagation system.

This module defines the hierarchy of exceptions raised while ingesting edges,
configuring a run and executing propagation steps. Non-convergence within the
iteration cap is deliberately absent: it is a reported outcome, not an error.
"""


class ValidationError(Exception):
    """
    Raised when input data fails validation.

    This exception is raised at the ingestion boundary, before any data reaches
    the propagation kernel.

    Examples:
        * Null node identifiers
        * Node identifiers that cannot be compared with each other
        * Edge documents that do not match the expected schema
    """

    def __str__(self) -> str:
        """Format validation error message."""
        return f"Validation Error: {super().__str__()}"


class ConfigurationError(Exception):
    """
    Raised when run configuration is invalid.

    Examples:
        * Non-positive iteration cap
        * Worker count below one
        * Negative memory budget
    """


class GraphOperationError(Exception):
    """
    Raised when a propagation step fails.

    A failed step publishes nothing: the previous generation stays current and
    the run is aborted. The original exception is available as ``__cause__``.

    Examples:
        * Adjacency rows referencing a node without a label
        * Labels that cannot be compared
        * Out-of-order generation publication
    """

    def __str__(self) -> str:
        """Format graph operation error message."""
        return f"Graph Operation Error: {super().__str__()}"


class ResourceExhaustedError(GraphOperationError):
    """
    Raised when a run exceeds the resources available to it.

    The driver never retries; shrinking the graph or the budget is a caller
    decision.

    Examples:
        * Resident memory growth above the configured budget
        * ``MemoryError`` raised while materializing a generation
    """


class InvariantViolationError(GraphOperationError):
    """
    Raised when a published generation breaks a label invariant.

    Only raised when invariant checking is switched on in the configuration.

    Examples:
        * A label increasing between two generations
    """

"""Core label propagation functionality."""

from .enums import TerminationReason
from .exceptions import (
    ConfigurationError,
    GraphOperationError,
    InvariantViolationError,
    ResourceExhaustedError,
    ValidationError,
)
from .config import DEFAULT_MAX_ITERATIONS, PropagationConfig
from .models import ComponentResult, Edge
from .types import GenerationListener
from .propagation import (
    AdjacencyRelation,
    LabelGeneration,
    LabelStore,
    PropagationDriver,
    compute_connected_components,
    compute_connected_components_async,
    symmetrize,
)
from .analysis import ComponentAnalysis

__all__ = [
    "AdjacencyRelation",
    "ComponentAnalysis",
    "ComponentResult",
    "ConfigurationError",
    "DEFAULT_MAX_ITERATIONS",
    "Edge",
    "GenerationListener",
    "GraphOperationError",
    "InvariantViolationError",
    "LabelGeneration",
    "LabelStore",
    "PropagationConfig",
    "PropagationDriver",
    "ResourceExhaustedError",
    "TerminationReason",
    "ValidationError",
    "compute_connected_components",
    "compute_connected_components_async",
    "symmetrize",
]

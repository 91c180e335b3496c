"""
Validation package for labelprop.

This package provides the checks applied to input data before it reaches the
propagation kernel.
"""

from .base import ValidationResult, validate_node_ids
from .schema import EDGE_DOCUMENT_SCHEMA, SchemaValidator

__all__ = [
    "EDGE_DOCUMENT_SCHEMA",
    "SchemaValidator",
    "ValidationResult",
    "validate_node_ids",
]

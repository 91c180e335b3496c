"""
Base validation components for labelprop.

This module provides the ValidationResult container and the node identifier
checks applied at the ingestion boundary. The propagation kernel assumes its
input already passed these checks: identifiers are non-null, hashable and
totally ordered among themselves.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional


@dataclass
class ValidationResult:
    """
    Container for validation results.

    Attributes:
        is_valid (bool): Whether the validation passed successfully
        errors (List[str]): List of validation error messages
        warnings (List[str]): List of validation warning messages
        context (Optional[Dict[str, Any]]): Additional context about the validation
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    context: Optional[Dict[str, Any]] = None


def validate_node_ids(node_ids: Iterable[Any]) -> ValidationResult:
    """
    Check that identifiers can be used as node ids.

    Every identifier must be non-null and hashable, and all identifiers must be
    mutually comparable so that a minimum is always defined. Booleans and
    floats are rejected because they silently compare equal to integers and
    would merge with them as dictionary keys.

    Args:
        node_ids: Identifiers to check, duplicates allowed

    Returns:
        ValidationResult: ``context["node_count"]`` holds the number of
        distinct identifiers when validation succeeds
    """
    errors: List[str] = []
    unique = set()
    for position, node in enumerate(node_ids):
        if node is None:
            errors.append(f"node id at position {position} is null")
            continue
        if isinstance(node, bool):
            errors.append(f"node id at position {position} is a boolean")
            continue
        if isinstance(node, float):
            errors.append(f"node id at position {position} is a float: {node!r}")
            continue
        try:
            unique.add(node)
        except TypeError:
            errors.append(f"node id at position {position} is not hashable: {node!r}")

    if not errors:
        try:
            sorted(unique)
        except TypeError as e:
            errors.append(f"node ids are not mutually comparable: {str(e)}")

    if errors:
        return ValidationResult(is_valid=False, errors=errors)
    return ValidationResult(is_valid=True, context={"node_count": len(unique)})

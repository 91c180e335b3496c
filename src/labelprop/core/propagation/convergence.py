"""
Convergence test between two consecutive generations.

Both checks are a symmetric difference of the two generations viewed as sets
of ``(node, label)`` pairs: a node counts as changed when its label differs or
when it is present in only one of them.
"""

from typing import Any, Iterator, Mapping, Set

_MISSING = object()


def _differences(previous: Mapping, current: Mapping) -> Iterator[Any]:
    for node, label in current.items():
        if previous.get(node, _MISSING) != label:
            yield node
    for node in previous:
        if node not in current:
            yield node


def has_changed(previous: Mapping, current: Mapping) -> bool:
    """Return True ("unconverged") if any label differs between generations."""
    if len(previous) != len(current):
        return True
    return next(_differences(previous, current), _MISSING) is not _MISSING


def changed_nodes(previous: Mapping, current: Mapping) -> Set[Any]:
    """Return every node whose label differs between the two generations."""
    return set(_differences(previous, current))

"""Tests for the edge and result models."""

import pytest

from labelprop.core.enums import TerminationReason
from labelprop.core.models import ComponentResult, Edge


def test_edge_unpacks_like_a_pair():
    source, target = Edge(1, 2)

    assert (source, target) == (1, 2)


def test_edge_rejects_null_endpoints():
    with pytest.raises(ValueError, match="must not be None"):
        Edge(None, 1)


def test_result_assignment_is_read_only():
    source = {1: 1, 2: 1}
    result = ComponentResult(
        assignment=source,
        converged=True,
        iterations_used=2,
        settled_after=1,
        reason=TerminationReason.CONVERGED,
    )
    source[3] = 3

    assert 3 not in result.assignment
    with pytest.raises(TypeError):
        result.assignment[2] = 2  # type: ignore[index]


def test_result_flags_must_agree():
    with pytest.raises(ValueError):
        ComponentResult(
            assignment={},
            converged=True,
            iterations_used=1,
            settled_after=0,
            reason=TerminationReason.EXHAUSTED,
        )


def test_result_counters_must_agree():
    with pytest.raises(ValueError):
        ComponentResult(
            assignment={},
            converged=False,
            iterations_used=1,
            settled_after=2,
            reason=TerminationReason.EXHAUSTED,
        )


def test_result_grouping_helpers():
    result = ComponentResult(
        assignment={1: 1, 2: 1, 5: 5},
        converged=True,
        iterations_used=2,
        settled_after=1,
        reason=TerminationReason.CONVERGED,
    )

    assert result.components() == {1: {1, 2}, 5: {5}}
    assert result.component_count == 2
    assert result.component_of(2) == 1
    with pytest.raises(KeyError):
        result.component_of(9)


def test_termination_reason_certification():
    assert TerminationReason.CONVERGED.is_certified
    assert not TerminationReason.EXHAUSTED.is_certified
    assert not TerminationReason.CANCELLED.is_certified
    assert TerminationReason("exhausted") is TerminationReason.EXHAUSTED

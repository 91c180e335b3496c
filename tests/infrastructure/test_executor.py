"""Tests for partitioned execution."""

import threading
import time

import pytest

from labelprop.infrastructure.executor import PartitionedExecutor


def test_partitions_cover_items_in_order():
    executor = PartitionedExecutor(partition_size=3)

    assert executor.partitions(list(range(7))) == [(0, 1, 2), (3, 4, 5), (6,)]
    assert executor.partitions([]) == []


def test_single_worker_runs_inline():
    seen = set()

    def record(part):
        seen.add(threading.get_ident())
        return sum(part)

    with PartitionedExecutor(max_workers=1, partition_size=2) as executor:
        assert executor.map_partitions(record, [1, 2, 3, 4, 5]) == [3, 7, 5]

    assert seen == {threading.get_ident()}


def test_results_keep_partition_order():
    def slow_first(part):
        if part[0] == 0:
            time.sleep(0.05)
        return part[0]

    with PartitionedExecutor(max_workers=4, partition_size=1) as executor:
        assert executor.map_partitions(slow_first, [0, 1, 2, 3]) == [0, 1, 2, 3]


@pytest.mark.timeout(5)
def test_failure_reported_after_all_partitions_finish():
    """A failing partition does not cut the barrier short."""
    finished = []

    def work(part):
        if part[0] == 0:
            raise KeyError("boom")
        time.sleep(0.05)
        finished.append(part[0])
        return part[0]

    with PartitionedExecutor(max_workers=3, partition_size=1) as executor:
        with pytest.raises(KeyError):
            executor.map_partitions(work, [0, 1, 2])

    assert sorted(finished) == [1, 2]


@pytest.mark.parametrize("kwargs", [{"max_workers": 0}, {"partition_size": 0}])
def test_invalid_arguments(kwargs):
    with pytest.raises(ValueError):
        PartitionedExecutor(**kwargs)


def test_shutdown_is_idempotent():
    executor = PartitionedExecutor(max_workers=2)
    executor.shutdown()
    executor.shutdown()

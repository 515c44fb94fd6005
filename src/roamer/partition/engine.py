from __future__ import annotations

from typing import Iterable

import numpy as np

from roamer.allocation import DIMENSIONS, Allocation
from roamer.capacity import ClusterCapacity
from roamer.job import Job, TaskGroup
from roamer.weights import WeightEntry, WeightTable


def _as_table(weights: WeightTable | Iterable[WeightEntry]) -> WeightTable:
    if isinstance(weights, WeightTable):
        return weights
    return WeightTable.build(weights)


class PartitionEngine:
    """
    Splits a fixed cluster capacity across the tasks of a job.

    The engine holds only read-only inputs, so one instance can partition
    any number of jobs, concurrently or not.
    """

    def __init__(
        self,
        capacity: ClusterCapacity,
        weights: WeightTable | Iterable[WeightEntry] = (),
    ) -> None:
        # Budget validation happens here, before any job is looked at.
        self._weights: WeightTable = _as_table(weights)
        self._capacity: ClusterCapacity = capacity

    def run(self, job: Job) -> Allocation:
        job.validate()
        counts = {group.name: group.resolved_count for group in job.groups}
        shares = {
            dimension: self._split(job.groups, self._capacity.effective(dimension))
            for dimension in DIMENSIONS
        }
        return Allocation(
            job.keys(), shares["compute"], shares["memory"], self._capacity, counts
        ).check()

    def _split(self, groups: list[TaskGroup], effective: int) -> np.ndarray:
        """Partition one resource dimension; returns shares in job task order."""
        offsets = np.cumsum([0] + [len(group.tasks) for group in groups])
        shares = np.zeros(int(offsets[-1]), dtype=np.int64)
        remaining = effective
        weighted_tasks = 0

        # Phase 1: weighted groups take their percentage of effective capacity.
        for i, group in enumerate(groups):
            entry = self._weights.weight_for(group.name)
            n = len(group.tasks)
            if entry is None or n == 0:
                continue
            share = effective * entry.weight // 100 // n
            shares[offsets[i]:offsets[i + 1]] = share
            remaining -= share * n
            weighted_tasks += n

        # Phase 2: the remainder is split evenly over all weightless tasks.
        weightless_tasks = int(offsets[-1]) - weighted_tasks
        if weightless_tasks == 0:
            return shares
        share = remaining // weightless_tasks
        for i, group in enumerate(groups):
            if group.name not in self._weights:
                shares[offsets[i]:offsets[i + 1]] = share
        return shares

    @property
    def capacity(self) -> ClusterCapacity:
        return self._capacity

    @property
    def weights(self) -> WeightTable:
        return self._weights

    def __repr__(self) -> str:
        return f"PartitionEngine(capacity={self._capacity!r}, weights={self._weights!r})"


def partition(
    job: Job,
    weights: WeightTable | Iterable[WeightEntry],
    capacity: ClusterCapacity,
) -> Allocation:
    """Partition ``capacity`` across ``job``; ``job`` itself is left untouched."""
    return PartitionEngine(capacity, weights).run(job)

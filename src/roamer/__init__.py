# src/roamer/__init__.py
"""
roamer
~~~~~~

Weighted partitioning of a fixed cluster capacity across the tasks of a
multi-group job.

Basic usage::

    from roamer import ClusterCapacity, Job, WeightEntry, partition

    job = Job.from_groups([("api", ["a", "b"]), ("worker", ["x", "y", "z"])])
    alloc = partition(job, [WeightEntry("api", 60)], ClusterCapacity(1000, 1000, 0))
    alloc.apply(job)

Public API
----------
ClusterCapacity       Total capacity and safety margin.
WeightEntry           One named weight percentage.
WeightTable           Validated, ordered weight entries.
Job, TaskGroup, Task  Job topology.
partition             Run the two-phase partition, returning an Allocation.
AllocationError       Base exception for all roamer errors.
"""

from __future__ import annotations

from roamer._exceptions import (
    AllocationError,
    AllocationOverflow,
    InvalidConfiguration,
    WeightBudgetExceeded,
)
from roamer.allocation import Allocation, GroupUsage
from roamer.capacity import ClusterCapacity, effective_capacity
from roamer.job import Job, Resources, Task, TaskGroup, TaskKey
from roamer.partition import PartitionEngine, partition
from roamer.weights import WeightEntry, WeightTable

__all__ = [
    "Allocation",
    "AllocationError",
    "AllocationOverflow",
    "ClusterCapacity",
    "GroupUsage",
    "InvalidConfiguration",
    "Job",
    "PartitionEngine",
    "Resources",
    "Task",
    "TaskGroup",
    "TaskKey",
    "WeightBudgetExceeded",
    "WeightEntry",
    "WeightTable",
    "effective_capacity",
    "partition",
]

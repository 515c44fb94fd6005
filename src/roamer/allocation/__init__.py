# src/roamer/allocation/__init__.py
"""
roamer.allocation
~~~~~~~~~~~~~~~~~

Result of a partition run: per-task compute and memory keyed by
``TaskKey(group, task)``, plus the post-condition checks applied before the
result leaves the engine.

Basic usage::

    alloc = partition(job, weights, capacity)
    alloc["api", "server"]          # → Resources(compute=300, memory=300)
    alloc.group_usage("api")        # → GroupUsage(compute=600, memory=600, count=1)
    alloc.unallocated_compute       # floor-division leftovers
    alloc.apply(job)                # write into the job's task resources

Public API
----------
Allocation          The result container.
GroupUsage          Summed usage of one task group.
DIMENSIONS          ("compute", "memory")
"""

from roamer.allocation.result import DIMENSIONS, Allocation, GroupUsage

__all__ = ["Allocation", "DIMENSIONS", "GroupUsage"]

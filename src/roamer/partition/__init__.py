# src/roamer/partition/__init__.py
"""
roamer.partition
~~~~~~~~~~~~~~~~

Two-phase capacity partitioning.  Weighted groups first receive their
percentage of effective capacity, split evenly over their tasks; whatever
remains is then split evenly over every task in an unweighted group.
Compute and memory are partitioned independently with the same rules.

Basic usage::

    from roamer.capacity import ClusterCapacity
    from roamer.job import Job
    from roamer.partition import partition
    from roamer.weights import WeightEntry

    job = Job.from_groups([("api", ["a", "b"]), ("worker", ["x", "y", "z"])])
    alloc = partition(job, [WeightEntry("api", 60)], ClusterCapacity(1000, 1000, 0))
    alloc["api", "a"].compute       # → 300
    alloc["worker", "x"].compute    # → 133

All integer divisions floor; leftovers stay unallocated.
"""

from roamer.partition.engine import PartitionEngine, partition

__all__ = ["PartitionEngine", "partition"]

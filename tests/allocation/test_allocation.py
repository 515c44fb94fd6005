"""
tests/allocation/test_allocation.py

Covers:
  - Lookup and group usage
  - Post-condition checks (AllocationOverflow)
  - apply(): overwrite semantics and count resolution
  - as_dict() shape
"""

import numpy as np
import pytest

from roamer import AllocationOverflow, ClusterCapacity, InvalidConfiguration, Job, TaskKey
from roamer.allocation import Allocation, GroupUsage
from roamer.job import Resources


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def cap():
    return ClusterCapacity(1000, 2000, 0)


@pytest.fixture
def job():
    return Job.from_groups([("api", ["a", "b"]), ("db", ["m"])])


@pytest.fixture
def alloc(job, cap):
    return Allocation(job.keys(), [300, 300, 400], [500, 500, 1000], cap, {"api": 2, "db": 1})


# ── Lookup ────────────────────────────────────────────────────────────────────

class TestLookup:

    def test_getitem_by_tuple_and_key(self, alloc):
        assert alloc["api", "a"] == Resources(300, 500)
        assert alloc[TaskKey("db", "m")] == Resources(400, 1000)

    def test_missing_key(self, alloc):
        with pytest.raises(KeyError):
            alloc["api", "zzz"]

    def test_contains_and_len(self, alloc):
        assert ("api", "b") in alloc
        assert ("db", "x") not in alloc
        assert "api" not in alloc
        assert len(alloc) == 3

    def test_iteration_order(self, alloc):
        assert [str(k) for k in alloc] == ["api/a", "api/b", "db/m"]

    def test_group_usage(self, alloc):
        assert alloc.group_usage("api") == GroupUsage(compute=600, memory=1000, count=2)

    def test_group_usage_unknown(self, alloc):
        with pytest.raises(KeyError):
            alloc.group_usage("nope")

    def test_totals(self, alloc):
        assert alloc.total_compute == 1000
        assert alloc.total_memory == 2000
        assert alloc.unallocated_compute == 0

    def test_values_read_only(self, alloc):
        with pytest.raises(ValueError):
            alloc.values("compute")[0] = 1

    def test_length_mismatch(self, job, cap):
        with pytest.raises(ValueError, match="Length mismatch"):
            Allocation(job.keys(), [1, 2], [1, 2, 3], cap, {})


# ── Post-conditions ───────────────────────────────────────────────────────────

class TestCheck:

    def test_exact_fit_passes(self, alloc):
        assert alloc.check() is alloc

    def test_overflow_raises(self, job, cap):
        bad = Allocation(job.keys(), [500, 500, 1], [0, 0, 0], cap, {"api": 1, "db": 1})
        with pytest.raises(AllocationOverflow) as info:
            bad.check()
        assert info.value.dimension == "compute"
        assert info.value.assigned == 1001
        assert info.value.capacity == 1000

    def test_negative_raises(self, job, cap):
        bad = Allocation(job.keys(), [0, 0, 0], [10, -1, 0], cap, {"api": 1, "db": 1})
        with pytest.raises(AllocationOverflow, match="Negative memory"):
            bad.check()

    def test_overflow_is_runtime_error(self, job, cap):
        bad = Allocation(job.keys(), [0, 0, 0], [2001, 0, 0], cap, {"api": 1, "db": 1})
        with pytest.raises(RuntimeError):
            bad.check()


# ── apply ─────────────────────────────────────────────────────────────────────

class TestApply:

    def test_populates_tasks(self, alloc, job):
        alloc.apply(job)
        assert job.groups[0].tasks[1].resources == Resources(300, 500)
        assert job.groups[1].tasks[0].resources == Resources(400, 1000)

    def test_overwrites_instead_of_accumulating(self, alloc, job):
        job.groups[0].tasks[0].resources.compute = 999
        alloc.apply(job)
        alloc.apply(job)
        assert job.groups[0].tasks[0].resources.compute == 300

    def test_resolves_unset_count(self, alloc, job):
        job.groups[1].count = 4
        alloc.apply(job)
        assert job.groups[0].count == 1
        assert job.groups[1].count == 4

    def test_foreign_task_rejected(self, alloc):
        other = Job.from_groups([("api", ["other"])])
        with pytest.raises(InvalidConfiguration):
            alloc.apply(other)

    def test_foreign_task_leaves_job_untouched(self, alloc):
        # known tasks come first, so a write-as-you-go apply would touch them
        other = Job.from_groups([("api", ["a", "b"]), ("extra", ["x"])])
        with pytest.raises(InvalidConfiguration) as info:
            alloc.apply(other)
        assert info.value.group == "extra"
        assert all(t.resources == Resources(0, 0) for g in other.groups for t in g.tasks)
        assert all(g.count is None for g in other.groups)


# ── Serialisation ─────────────────────────────────────────────────────────────

class TestAsDict:

    def test_shape(self, alloc):
        d = alloc.as_dict()
        assert d["capacity"]["effective_compute"] == 1000
        assert d["unallocated"] == {"compute": 0, "memory": 0}
        assert [g["name"] for g in d["groups"]] == ["api", "db"]
        assert d["groups"][0]["tasks"] == [
            {"name": "a", "compute": 300, "memory": 500},
            {"name": "b", "compute": 300, "memory": 500},
        ]

    def test_plain_ints(self, alloc):
        d = alloc.as_dict()
        assert all(type(t["compute"]) is int for g in d["groups"] for t in g["tasks"])

    def test_repr(self, alloc):
        assert "tasks=3" in repr(alloc)
        assert "compute=1000/1000" in repr(alloc)

    def test_empty(self, cap):
        empty = Allocation([], [], [], cap, {})
        assert empty.check().total_compute == 0
        assert np.asarray(empty.values("memory")).size == 0

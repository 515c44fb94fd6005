from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, NamedTuple

import numpy as np

from roamer._exceptions import AllocationOverflow, InvalidConfiguration
from roamer.capacity import ClusterCapacity
from roamer.job import Job, Resources, TaskKey

DIMENSIONS: tuple[str, str] = ("compute", "memory")


class GroupUsage(NamedTuple):
    compute: int
    memory: int
    count: int


class Allocation:
    """
    Immutable per-task assignment in job order.

    Assigned amounts are kept as two int64 arrays aligned with ``keys``;
    lookups by key go through a position index.
    """

    def __init__(
        self,
        keys: Iterable[TaskKey],
        compute: np.ndarray | Iterable[int],
        memory: np.ndarray | Iterable[int],
        capacity: ClusterCapacity,
        counts: Mapping[str, int],
    ) -> None:
        self._keys: tuple[TaskKey, ...] = tuple(TaskKey(*k) for k in keys)
        self._position: dict[TaskKey, int] = {k: i for i, k in enumerate(self._keys)}
        self._compute: np.ndarray = np.array(compute, dtype=np.int64).reshape(-1)
        self._memory: np.ndarray = np.array(memory, dtype=np.int64).reshape(-1)
        self._compute.setflags(write=False)
        self._memory.setflags(write=False)
        self._capacity = capacity
        self._counts: dict[str, int] = dict(counts)

        n = len(self._keys)
        if self._compute.shape != (n,) or self._memory.shape != (n,):
            raise ValueError(
                f"Length mismatch: {n} tasks, {self._compute.size} compute "
                f"and {self._memory.size} memory values."
            )

    # ── post-conditions ──────────────────────────────────────────────────

    def check(self) -> "Allocation":
        """Raise AllocationOverflow unless every dimension fits effective capacity."""
        for dimension in DIMENSIONS:
            values = self.values(dimension)
            effective = self._capacity.effective(dimension)
            if values.size and values.min() < 0:
                i = int(np.argmin(values))
                raise AllocationOverflow(
                    dimension,
                    int(values[i]),
                    effective,
                    message=f"Negative {dimension} ({int(values[i])}) assigned to {self._keys[i]}.",
                )
            assigned = int(values.sum())
            if assigned > effective:
                raise AllocationOverflow(dimension, assigned, effective)
        return self

    # ── lookup ───────────────────────────────────────────────────────────

    def __getitem__(self, key: TaskKey | tuple[str, str]) -> Resources:
        i = self._position[TaskKey(*key)]
        return Resources(compute=int(self._compute[i]), memory=int(self._memory[i]))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, tuple) and len(key) == 2 and TaskKey(*key) in self._position

    def __iter__(self) -> Iterator[TaskKey]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def items(self) -> Iterator[tuple[TaskKey, Resources]]:
        for key in self._keys:
            yield key, self[key]

    def values(self, dimension: str) -> np.ndarray:
        if dimension == "compute":
            return self._compute
        if dimension == "memory":
            return self._memory
        raise KeyError(dimension)

    def group_usage(self, group: str) -> GroupUsage:
        if group not in self._counts:
            raise KeyError(group)
        mask = np.fromiter(
            (k.group == group for k in self._keys), dtype=bool, count=len(self._keys)
        )
        return GroupUsage(
            compute=int(self._compute[mask].sum()),
            memory=int(self._memory[mask].sum()),
            count=self._counts[group],
        )

    # ── totals ───────────────────────────────────────────────────────────

    @property
    def capacity(self) -> ClusterCapacity:
        return self._capacity

    @property
    def groups(self) -> tuple[str, ...]:
        return tuple(self._counts)

    @property
    def total_compute(self) -> int:
        return int(self._compute.sum())

    @property
    def total_memory(self) -> int:
        return int(self._memory.sum())

    @property
    def unallocated_compute(self) -> int:
        return self._capacity.effective_compute - self.total_compute

    @property
    def unallocated_memory(self) -> int:
        return self._capacity.effective_memory - self.total_memory

    # ── hand-off ─────────────────────────────────────────────────────────

    def apply(self, job: Job) -> Job:
        """
        Write the assignment into ``job`` in place and return it.

        Existing resource values are overwritten, and unset group counts
        are resolved to 1. A job holding any task outside this allocation
        is rejected before anything is written.
        """
        for key in job.keys():
            if key not in self._position:
                raise InvalidConfiguration(
                    f"Task {key} is not part of this allocation.", group=key.group
                )
        for group in job.groups:
            for task in group.tasks:
                i = self._position[TaskKey(group.name, task.name)]
                task.resources.compute = int(self._compute[i])
                task.resources.memory = int(self._memory[i])
            if group.count is None:
                group.count = 1
        return job

    def as_dict(self) -> dict[str, Any]:
        groups: list[dict[str, Any]] = []
        for name in self._counts:
            usage = self.group_usage(name)
            groups.append(
                {
                    "name": name,
                    "count": usage.count,
                    "compute": usage.compute,
                    "memory": usage.memory,
                    "tasks": [
                        {"name": k.task, "compute": r.compute, "memory": r.memory}
                        for k, r in self.items()
                        if k.group == name
                    ],
                }
            )
        return {
            "capacity": {
                "compute": self._capacity.compute,
                "memory": self._capacity.memory,
                "safety_margin": self._capacity.safety_margin,
                "effective_compute": self._capacity.effective_compute,
                "effective_memory": self._capacity.effective_memory,
            },
            "unallocated": {
                "compute": self.unallocated_compute,
                "memory": self.unallocated_memory,
            },
            "groups": groups,
        }

    def __repr__(self) -> str:
        return (
            f"Allocation(tasks={len(self._keys)}, "
            f"compute={self.total_compute}/{self._capacity.effective_compute}, "
            f"memory={self.total_memory}/{self._capacity.effective_memory})"
        )

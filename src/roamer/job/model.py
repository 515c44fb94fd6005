from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Sequence

from roamer._exceptions import InvalidConfiguration


class TaskKey(NamedTuple):
    group: str
    task: str

    def __str__(self) -> str:
        return f"{self.group}/{self.task}"


@dataclass
class Resources:
    compute: int = 0
    memory: int = 0


@dataclass
class Task:
    name: str
    resources: Resources = field(default_factory=Resources)


@dataclass
class TaskGroup:
    name: str
    tasks: list[Task] = field(default_factory=list)
    count: int | None = None

    @property
    def resolved_count(self) -> int:
        if self.count is None:
            return 1
        if isinstance(self.count, bool) or not isinstance(self.count, int) or self.count < 1:
            raise InvalidConfiguration(
                f"Count of group {self.name!r} must be an integer >= 1; got {self.count!r}.",
                group=self.name,
            )
        return self.count

    def __len__(self) -> int:
        return len(self.tasks)


@dataclass
class Job:
    groups: list[TaskGroup] = field(default_factory=list)
    name: str | None = None

    @property
    def total_task_count(self) -> int:
        return sum(len(group.tasks) for group in self.groups)

    def keys(self) -> Iterator[TaskKey]:
        for group in self.groups:
            for task in group.tasks:
                yield TaskKey(group.name, task.name)

    def validate(self) -> None:
        """Reject duplicate group names, duplicate task names and bad counts."""
        seen_groups: set[str] = set()
        for group in self.groups:
            if group.name in seen_groups:
                raise InvalidConfiguration(
                    f"Duplicate task group {group.name!r} in job.", group=group.name
                )
            seen_groups.add(group.name)
            group.resolved_count  # raises on a bad count
            seen_tasks: set[str] = set()
            for task in group.tasks:
                if task.name in seen_tasks:
                    raise InvalidConfiguration(
                        f"Duplicate task {task.name!r} in group {group.name!r}.",
                        group=group.name,
                    )
                seen_tasks.add(task.name)

    @classmethod
    def from_groups(cls, groups: Sequence[tuple[str, Sequence[str]]], name: str | None = None) -> "Job":
        """Shorthand topology builder: ``[("api", ["server", "sidecar"]), ...]``."""
        return cls(
            [TaskGroup(g, [Task(t) for t in tasks]) for g, tasks in groups],
            name=name,
        )

# src/roamer/job/__init__.py
"""
roamer.job
~~~~~~~~~~

In-memory job topology: an ordered list of task groups, each holding an
ordered list of tasks with a mutable resource request.

Basic usage::

    from roamer.job import Job, TaskGroup, Task

    job = Job([
        TaskGroup("api", [Task("server"), Task("sidecar")]),
        TaskGroup("worker", [Task("run")], count=5),
    ])
    job.total_task_count    # → 3, count is not a multiplier
"""

from roamer.job.model import Job, Resources, Task, TaskGroup, TaskKey

__all__ = ["Job", "Resources", "Task", "TaskGroup", "TaskKey"]

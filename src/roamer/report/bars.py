from __future__ import annotations

from typing import TextIO

from roamer.capacity import ClusterCapacity
from roamer.job import Job

BAR_WIDTH: int = 25
FULL_CELL: str = "■"
EMPTY_CELL: str = "□"


def unit_bar(part: int, full: int, unit: str, label: str, width: int = BAR_WIDTH) -> str:
    if full > 0:
        filled = min(width, max(0, width * part // full))
        percent = part / full * 100.0
    else:
        filled, percent = 0, 0.0
    bar = FULL_CELL * filled + EMPTY_CELL * (width - filled)
    return f"{label}\t{part}/{full} {unit}\t{bar} {percent:.2f}%"


def render(job: Job, capacity: ClusterCapacity) -> str:
    """Render ``job`` whose task resources have already been populated."""
    lines: list[str] = []
    for group in job.groups:
        header = group.name if group.count is None else f"{group.name} ({group.count})"
        lines.append(header)
        memory = sum(task.resources.memory for task in group.tasks)
        compute = sum(task.resources.compute for task in group.tasks)
        lines.append(unit_bar(memory, capacity.total("memory"), "MB", "Memory"))
        lines.append(unit_bar(compute, capacity.total("compute"), "MHz", "CPU"))
        lines.append("")
        for task in group.tasks:
            lines.append("\t" + task.name)
            lines.append(unit_bar(task.resources.memory, capacity.total("memory"), "MB", "\tMemory"))
            lines.append(unit_bar(task.resources.compute, capacity.total("compute"), "MHz", "\tCPU"))
    return "\n".join(lines)


def write(job: Job, capacity: ClusterCapacity, stream: TextIO) -> None:
    stream.write(render(job, capacity))
    stream.write("\n")

# src/roamer/report/__init__.py
"""
roamer.report
~~~~~~~~~~~~~

Plain-text rendering of an allocated job: one block per task group with
memory and CPU usage bars against total cluster capacity, followed by the
same bars for each task.

Basic usage::

    from roamer.report import render

    alloc.apply(job)
    print(render(job, capacity))
"""

from roamer.report.bars import render, unit_bar

__all__ = ["render", "unit_bar"]

# src/roamer/config/__init__.py
"""
roamer.config
~~~~~~~~~~~~~

Loaders turning YAML (or JSON) files into the in-memory inputs of a
partition run.

Basic usage::

    from pathlib import Path
    from roamer.config import RoamerConfig, load_job

    config = RoamerConfig.load(Path("config.yaml"))
    job = load_job(Path("job.yaml"))
    alloc = partition(job, config.weights, config.capacity)

The ``infrastructure`` block can be overridden from the environment via
``ROAMER_CPU``, ``ROAMER_MEMORY`` and ``ROAMER_SAFETY_MARGIN``.
"""

from roamer.config.loader import RoamerConfig, load_job, parse_job

__all__ = ["RoamerConfig", "load_job", "parse_job"]

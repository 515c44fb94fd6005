# src/roamer/capacity/__init__.py
"""
roamer.capacity
~~~~~~~~~~~~~~~

Total cluster capacity along two scalar dimensions (compute, memory) and
the safety margin withheld from allocation.

Basic usage::

    from roamer.capacity import ClusterCapacity

    cap = ClusterCapacity(compute=4000, memory=8192, safety_margin=5)
    cap.effective_compute     # → 3800
    cap.effective_memory      # → 7782

Leaving ``safety_margin`` unset applies the default of 3 percent.
"""

from roamer.capacity.capacity import (
    DEFAULT_SAFETY_MARGIN,
    MAX_UNITS,
    ClusterCapacity,
    effective_capacity,
)

__all__ = ["ClusterCapacity", "DEFAULT_SAFETY_MARGIN", "MAX_UNITS", "effective_capacity"]

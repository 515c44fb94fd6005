# src/roamer/weights/__init__.py
"""
roamer.weights
~~~~~~~~~~~~~~

Named weight fractions: the percentage of effective capacity a task group
is entitled to before the remainder is split evenly.

Basic usage::

    from roamer.weights import WeightEntry, WeightTable

    table = WeightTable.build([WeightEntry("api", 60), WeightEntry("db", 25)])
    table.weight_for("api")     # → WeightEntry(group='api', weight=60)
    table.weight_for("worker")  # → None

The budget (sum of weights ≤ 100) is checked once, in ``build``.
"""

from roamer.weights.table import WeightEntry, WeightTable

__all__ = ["WeightEntry", "WeightTable"]

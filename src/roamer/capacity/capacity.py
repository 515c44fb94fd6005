from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from roamer._exceptions import InvalidConfiguration

DEFAULT_SAFETY_MARGIN: int = 3
# Allocations are stored as int64 vectors.
MAX_UNITS: int = int(np.iinfo(np.int64).max)


def _require_int(name: str, value: object) -> int:
    # bool is an int subclass; True cpu units is never intended.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfiguration(f"{name} must be an integer; got {value!r}.")
    return value


def effective_capacity(total: int, safety_margin: int) -> int:
    """Capacity left after withholding ``safety_margin`` percent, truncated."""
    total = _require_int("total", total)
    safety_margin = _require_int("safety_margin", safety_margin)
    if total < 0:
        raise InvalidConfiguration(f"Capacity must be non-negative; got {total}.")
    if not 0 <= safety_margin < 100:
        raise InvalidConfiguration(
            f"Safety margin must be in [0, 100); got {safety_margin}."
        )
    return total * (100 - safety_margin) // 100


@dataclass(frozen=True)
class ClusterCapacity:
    compute: int
    memory: int
    safety_margin: int | None = None
    effective_compute: int = field(init=False, repr=False)
    effective_memory: int = field(init=False, repr=False)

    def __post_init__(self) -> None:
        for name in ("compute", "memory"):
            value = _require_int(name, getattr(self, name))
            if value < 0:
                raise InvalidConfiguration(
                    f"{name} capacity must be non-negative; got {value}."
                )
            if value > MAX_UNITS:
                raise InvalidConfiguration(
                    f"{name} capacity must not exceed {MAX_UNITS}; got {value}."
                )
        margin = (
            DEFAULT_SAFETY_MARGIN if self.safety_margin is None else self.safety_margin
        )
        # Derived once here so every allocation run reads the same figures.
        object.__setattr__(self, "safety_margin", margin)
        object.__setattr__(
            self, "effective_compute", effective_capacity(self.compute, margin)
        )
        object.__setattr__(
            self, "effective_memory", effective_capacity(self.memory, margin)
        )

    def effective(self, dimension: str) -> int:
        if dimension == "compute":
            return self.effective_compute
        if dimension == "memory":
            return self.effective_memory
        raise KeyError(dimension)

    def total(self, dimension: str) -> int:
        if dimension == "compute":
            return self.compute
        if dimension == "memory":
            return self.memory
        raise KeyError(dimension)

from __future__ import annotations


class AllocationError(Exception):
    """Base class for every error raised while partitioning cluster capacity."""


class InvalidConfiguration(AllocationError, ValueError):
    """Malformed capacity, weight or job topology input."""

    def __init__(self, message: str, *, group: str | None = None) -> None:
        super().__init__(message)
        self.group = group


class WeightBudgetExceeded(AllocationError, ValueError):
    """The weight table claims more than 100 percent of effective capacity."""

    def __init__(self, group: str, total: int) -> None:
        super().__init__(
            f"Sum of weights greater than 100: reached {total}% at group {group!r}."
        )
        self.group = group
        self.total = total


class AllocationOverflow(AllocationError, RuntimeError):
    """Assigned resources violate effective capacity; indicates an engine defect."""

    def __init__(
        self,
        dimension: str,
        assigned: int,
        capacity: int,
        message: str | None = None,
    ) -> None:
        super().__init__(
            message
            or f"Assigned {dimension} ({assigned}) exceeds effective capacity ({capacity})."
        )
        self.dimension = dimension
        self.assigned = assigned
        self.capacity = capacity

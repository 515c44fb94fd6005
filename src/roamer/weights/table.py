from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from roamer._exceptions import InvalidConfiguration, WeightBudgetExceeded

WEIGHT_BUDGET: int = 100


@dataclass(frozen=True)
class WeightEntry:
    group: str
    weight: int

    def __post_init__(self) -> None:
        if isinstance(self.weight, bool) or not isinstance(self.weight, int):
            raise InvalidConfiguration(
                f"Weight of group {self.group!r} must be an integer; got {self.weight!r}.",
                group=self.group,
            )
        if self.weight < 0:
            raise InvalidConfiguration(
                f"Weight of group {self.group!r} must be non-negative; got {self.weight}.",
                group=self.group,
            )


class WeightTable:
    """
    Ordered, validated sequence of WeightEntry.

    Entries keep their declaration order. When several entries share a group
    name, lookups resolve to the first one and the rest are inert (they still
    count towards the budget).
    """

    def __init__(self, entries: Iterable[WeightEntry] = ()) -> None:
        self._entries: tuple[WeightEntry, ...] = tuple(entries)
        self._total: int = self._validate(self._entries)
        self._index: dict[str, WeightEntry] = {}
        for entry in self._entries:
            self._index.setdefault(entry.group, entry)

    @classmethod
    def build(cls, entries: Iterable[WeightEntry]) -> "WeightTable":
        return cls(entries)

    @staticmethod
    def _validate(entries: tuple[WeightEntry, ...]) -> int:
        total = 0
        for entry in entries:
            if not isinstance(entry, WeightEntry):
                raise InvalidConfiguration(f"Expected a WeightEntry; got {entry!r}.")
            total += entry.weight
            if total > WEIGHT_BUDGET:
                raise WeightBudgetExceeded(entry.group, total)
        return total

    # ── lookup ───────────────────────────────────────────────────────────

    def weight_for(self, group: str) -> WeightEntry | None:
        return self._index.get(group)

    def __contains__(self, group: object) -> bool:
        return group in self._index

    # ── properties / repr ────────────────────────────────────────────────

    @property
    def entries(self) -> tuple[WeightEntry, ...]:
        return self._entries

    @property
    def total_percent(self) -> int:
        return self._total

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WeightEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return (
            f"WeightTable(entries={len(self._entries)}, "
            f"total_percent={self._total})"
        )

"""Cumulative confusion table over ``(actual, predicted)`` label pairs.

The table is the only state an evaluation accumulates.  Tables built on
separate workers are combined by count-wise addition, which is associative and
commutative, so merging partial tables gives the same counts as feeding every
observation to a single table.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator

from annostats.align.base import ABSENT, Label, Observation


class ConfusionTable:
    """Multiset of :class:`Observation` counts."""

    __slots__ = ("_counts",)

    def __init__(self, observations: Iterable[tuple[Label, Label]] = ()) -> None:
        self._counts: Counter[Observation] = Counter()
        self.add_all(observations)

    # -- mutation ---------------------------------------------------------

    def add(self, actual: Label, predicted: Label, count: int = 1) -> None:
        """Record ``count`` occurrences of ``(actual, predicted)``."""

        if count < 0:
            raise ValueError("count must be non-negative")
        if actual is ABSENT and predicted is ABSENT:
            raise ValueError("an observation needs an item on at least one side")
        if count:
            self._counts[Observation(actual, predicted)] += count

    def add_all(self, observations: Iterable[tuple[Label, Label]]) -> None:
        """Record every observation, or none of them if one is rejected."""

        staged: Counter[Observation] = Counter()
        for actual, predicted in observations:
            if actual is ABSENT and predicted is ABSENT:
                raise ValueError("an observation needs an item on at least one side")
            staged[Observation(actual, predicted)] += 1
        self._counts.update(staged)

    def update(self, other: ConfusionTable) -> None:
        """Add every count of ``other`` into this table."""

        self._counts.update(other._counts)

    def __add__(self, other: object) -> ConfusionTable:
        if not isinstance(other, ConfusionTable):
            return NotImplemented
        merged = self.copy()
        merged.update(other)
        return merged

    def copy(self) -> ConfusionTable:
        table = ConfusionTable()
        table._counts = Counter(self._counts)
        return table

    # -- queries ----------------------------------------------------------

    def count(self, actual: Label, predicted: Label) -> int:
        """Return the count for ``(actual, predicted)``; unseen pairs count 0."""

        return self._counts.get(Observation(actual, predicted), 0)

    def __getitem__(self, pair: tuple[Label, Label]) -> int:
        actual, predicted = pair
        return self.count(actual, predicted)

    def total(self) -> int:
        return sum(self._counts.values())

    def __len__(self) -> int:
        return len(self._counts)

    def __iter__(self) -> Iterator[Observation]:
        return iter(self._counts)

    def items(self) -> Iterator[tuple[Observation, int]]:
        return iter(self._counts.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfusionTable):
            return NotImplemented
        return +self._counts == +other._counts

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"ConfusionTable({dict(self._counts)!r})"

    def actual_labels(self) -> set[Label]:
        """Return labels seen on the reference side, excluding ``ABSENT``."""

        return {obs.actual for obs in self._counts if obs.actual is not ABSENT}

    def predicted_labels(self) -> set[Label]:
        """Return labels seen on the predicted side, excluding ``ABSENT``."""

        return {obs.predicted for obs in self._counts if obs.predicted is not ABSENT}

    def labels(self) -> set[Label]:
        return self.actual_labels() | self.predicted_labels()

    def row_total(self, actual: Label) -> int:
        """Sum of counts whose actual side is ``actual``."""

        return sum(n for obs, n in self._counts.items() if obs.actual == actual)

    def column_total(self, predicted: Label) -> int:
        """Sum of counts whose predicted side is ``predicted``."""

        return sum(n for obs, n in self._counts.items() if obs.predicted == predicted)

    def as_dict(self) -> dict[tuple[Label, Label], int]:
        return {(obs.actual, obs.predicted): n for obs, n in self._counts.items()}


__all__ = ["ConfusionTable"]

"""Core alignment primitives.

An observation pairs the label found on the reference side of a span key with
the label found on the predicted side.  A side without an item at that key is
marked with :attr:`Sentinel.ABSENT`.  When no label function is supplied every
present item carries the single implicit label :attr:`Sentinel.SPAN`, so the
label dimension collapses to presence versus absence.
"""

from __future__ import annotations

from collections.abc import Hashable
from enum import Enum
from typing import Any, NamedTuple, Protocol, TypeAlias, runtime_checkable


class Sentinel(Enum):
    """Reserved label values that never collide with caller labels."""

    ABSENT = "<none>"
    SPAN = "<span>"

    def __repr__(self) -> str:
        return f"Sentinel.{self.name}"

    def __str__(self) -> str:
        return self.value


ABSENT = Sentinel.ABSENT
SPAN = Sentinel.SPAN

Label: TypeAlias = Hashable


class Observation(NamedTuple):
    """A single ``(actual, predicted)`` label pair for one aligned span key."""

    actual: Label
    predicted: Label


@runtime_checkable
class SpanKeyExtractor(Protocol):
    """Callable returning the hashable span key of an item."""

    def __call__(self, item: Any) -> Hashable: ...


@runtime_checkable
class LabelExtractor(Protocol):
    """Callable returning the label of an item."""

    def __call__(self, item: Any) -> Label: ...


def identity(item: Any) -> Hashable:
    """Default span key: the item itself."""

    return item


__all__ = [
    "Sentinel",
    "ABSENT",
    "SPAN",
    "Label",
    "Observation",
    "SpanKeyExtractor",
    "LabelExtractor",
    "identity",
]

"""Alignment of reference and predicted items by span key.

Items on each side are grouped by the key returned from the span key function,
keeping input order within each group.  Every key in the union of both sides
yields one observation per occurrence slot: the i-th reference item at a key is
paired with the i-th predicted item at that key and surplus items on either
side are paired with :data:`ABSENT`.  Without duplicate keys this is exactly
one observation per distinct key.

Keys are visited in reference order followed by the predicted-only keys in
predicted order, so alignment is deterministic for ordered inputs.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable
from itertools import zip_longest
from typing import Any

from annostats.utils.errors import LabelExtractionError, SpanKeyExtractionError

from .base import ABSENT, SPAN, Label, LabelExtractor, Observation, SpanKeyExtractor, identity


def group_by_key(items: Iterable[Any], span_key: SpanKeyExtractor) -> dict[Hashable, list[Any]]:
    """Return ``items`` grouped by span key preserving first-seen key order."""

    groups: dict[Hashable, list[Any]] = {}
    for item in items:
        key = span_key(item)
        try:
            bucket = groups.setdefault(key, [])
        except TypeError as exc:
            raise SpanKeyExtractionError(f"span key {key!r} is not hashable") from exc
        bucket.append(item)
    return groups


def _label_of(item: Any, label: LabelExtractor | None) -> Label:
    if label is None:
        return SPAN
    value = label(item)
    if value is None:
        raise LabelExtractionError(f"no label for item {item!r}")
    try:
        hash(value)
    except TypeError as exc:
        raise LabelExtractionError(f"label {value!r} is not hashable") from exc
    return value


def align(
    reference: Iterable[Any],
    predicted: Iterable[Any],
    span_key: SpanKeyExtractor | None = None,
    label: LabelExtractor | None = None,
) -> list[Observation]:
    """Align ``reference`` and ``predicted`` items into observations.

    Parameters
    ----------
    reference, predicted:
        Item collections; either may be empty.
    span_key:
        Function mapping an item to its hashable span key.  Defaults to the
        item itself.
    label:
        Function mapping an item to its label.  When omitted every present
        item is labelled :data:`SPAN` (span-only mode).

    Raises
    ------
    SpanKeyExtractionError
        If a span key is not hashable.
    LabelExtractionError
        If ``label`` returns ``None`` for an item.
    """

    key_fn = span_key if span_key is not None else identity
    ref_groups = group_by_key(reference, key_fn)
    pred_groups = group_by_key(predicted, key_fn)

    keys = list(ref_groups)
    keys.extend(k for k in pred_groups if k not in ref_groups)

    observations: list[Observation] = []
    for key in keys:
        pairs = zip_longest(ref_groups.get(key, ()), pred_groups.get(key, ()), fillvalue=ABSENT)
        for ref_item, pred_item in pairs:
            actual = ABSENT if ref_item is ABSENT else _label_of(ref_item, label)
            guess = ABSENT if pred_item is ABSENT else _label_of(pred_item, label)
            observations.append(Observation(actual, guess))
    return observations


__all__ = ["group_by_key", "align"]

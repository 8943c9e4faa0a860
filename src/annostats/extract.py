"""Ready-made span key and label functions for common item shapes.

Items may be objects exposing attributes (``start``, ``end``, ``label``,
``text``...) or mappings with the same keys.  Lookups fail fast: a missing
field raises an :class:`~annostats.utils.errors.ExtractionError` rather than
falling back to a default that would silently distort the confusion table.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from annostats.utils.errors import LabelExtractionError, SpanKeyExtractionError

_MISSING = object()


def _lookup(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name, _MISSING)
    attrs = getattr(item, "attrs", None)
    value = getattr(item, name, _MISSING)
    if value is _MISSING and isinstance(attrs, Mapping):
        value = attrs.get(name, _MISSING)
    return value


def annotation_to_span(item: Any) -> tuple[int, int]:
    """Return the ``(start, end)`` extent of ``item``."""

    start = _lookup(item, "start")
    end = _lookup(item, "end")
    if start is _MISSING or end is _MISSING:
        raise SpanKeyExtractionError(f"item has no start/end: {item!r}")
    return start, end


def annotation_to_text(item: Any) -> str:
    """Return the covered text of ``item`` for text based alignment."""

    text = _lookup(item, "text")
    if text is _MISSING or text is None:
        raise SpanKeyExtractionError(f"item has no text: {item!r}")
    return str(text)


def annotation_to_attribute(name: str) -> Callable[[Any], Any]:
    """Return a label function reading field ``name`` of an item.

    Mapping items are read by key; other items by attribute, then from an
    ``attrs`` mapping when present.
    """

    def extract(item: Any) -> Any:
        value = _lookup(item, name)
        if value is _MISSING or value is None:
            raise LabelExtractionError(f"item has no {name!r} value: {item!r}")
        return value

    extract.__name__ = f"annotation_to_{name}"
    return extract


SPAN_KEYS: dict[str, Callable[[Any], Any]] = {
    "extent": annotation_to_span,
    "text": annotation_to_text,
}


def span_key_function(name: str) -> Callable[[Any], Any]:
    """Return the named span key function (``"extent"`` or ``"text"``)."""

    try:
        return SPAN_KEYS[name]
    except KeyError:
        raise ValueError(f"unknown span key: {name!r}") from None


__all__ = [
    "annotation_to_span",
    "annotation_to_text",
    "annotation_to_attribute",
    "span_key_function",
    "SPAN_KEYS",
]

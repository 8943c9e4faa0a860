"""Span alignment: pairing reference and predicted items by span key."""

from .aligner import align, group_by_key
from .base import (
    ABSENT,
    SPAN,
    Label,
    LabelExtractor,
    Observation,
    Sentinel,
    SpanKeyExtractor,
    identity,
)

__all__ = [
    "ABSENT",
    "SPAN",
    "Label",
    "LabelExtractor",
    "Observation",
    "Sentinel",
    "SpanKeyExtractor",
    "align",
    "group_by_key",
    "identity",
]

"""Span annotation documents.

Spans follow the half-open interval convention ``[start, end)`` where
``start`` is inclusive and ``end`` is exclusive.  A document groups the spans
annotated over one piece of content and is identified by its ``doc`` name;
reference and predicted documents with the same name form one unit of
comparison.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from annostats.utils.errors import IOFormatError, SpanOutOfBoundsError


@dataclass(slots=True, frozen=True)
class Annotation:
    """A labeled span.  ``label`` may be ``None`` for unlabeled spans."""

    start: int
    end: int
    label: str | None = None
    text: str | None = None
    attrs: dict[str, object] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self) -> None:
        if self.end <= self.start or self.start < 0:
            raise SpanOutOfBoundsError(f"invalid span [{self.start}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.start

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Annotation:
        """Build an annotation from a JSON span record."""

        if not isinstance(data, Mapping):
            raise IOFormatError(f"span record must be an object, got {type(data).__name__}")
        try:
            start = data["start"]
            end = data["end"]
        except KeyError as exc:
            raise IOFormatError(f"span record missing {exc.args[0]!r}: {dict(data)!r}") from None
        if not isinstance(start, int) or not isinstance(end, int):
            raise IOFormatError(f"span indices must be integers: {dict(data)!r}")
        extra = {k: v for k, v in data.items() if k not in {"start", "end", "label", "text"}}
        return cls(start, end, data.get("label"), data.get("text"), extra)


@dataclass(slots=True, frozen=True)
class AnnotatedDocument:
    """Spans annotated over a single document."""

    doc: str
    spans: tuple[Annotation, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, default_doc: str) -> AnnotatedDocument:
        spans = data.get("spans", [])
        if not isinstance(spans, Sequence) or isinstance(spans, str):
            raise IOFormatError(f"'spans' must be a list in document {default_doc!r}")
        doc = data.get("doc") or default_doc
        return cls(str(doc), tuple(Annotation.from_dict(sp) for sp in spans))


def pair_documents(
    reference: Sequence[AnnotatedDocument],
    predicted: Sequence[AnnotatedDocument],
) -> list[tuple[str, tuple[Annotation, ...], tuple[Annotation, ...]]]:
    """Pair documents by name.

    A document present on one side only is paired with no spans on the other.
    Pairs are returned in reference order followed by predicted-only names.

    Raises
    ------
    IOFormatError
        If a document name occurs twice on the same side.
    """

    ref_by_name = _index(reference, "reference")
    pred_by_name = _index(predicted, "predicted")
    names = list(ref_by_name)
    names.extend(n for n in pred_by_name if n not in ref_by_name)
    return [(n, ref_by_name.get(n, ()), pred_by_name.get(n, ())) for n in names]


def _index(
    docs: Sequence[AnnotatedDocument], side: str
) -> dict[str, tuple[Annotation, ...]]:
    out: dict[str, tuple[Annotation, ...]] = {}
    for d in docs:
        if d.doc in out:
            raise IOFormatError(f"duplicate {side} document: {d.doc!r}")
        out[d.doc] = d.spans
    return out


__all__ = ["Annotation", "AnnotatedDocument", "pair_documents"]

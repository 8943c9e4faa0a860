"""Accumulating annotation statistics.

:class:`AnnotationStatistics` aligns reference and predicted items on every
:meth:`~AnnotationStatistics.add` call and folds the observations into one
cumulative :class:`~annostats.score.confusion.ConfusionTable`.  All metrics are
computed from that table on demand, so queries always reflect every addition
so far and never change state.

Zero-denominator convention
---------------------------
Precision and recall are ``1.0`` when their denominator is ``0``: with nothing
predicted (or nothing expected) nothing was wrong.  The F-measure is ``0.0``
when its denominator ``beta**2 * P + R`` is ``0``.

True negatives
--------------
``TN(L)`` is the sum of the diagonal counts of every *other* label.  Confusions
between two other labels are not counted as true negatives for ``L``, which
differs from the usual ``total - TP - FP - FN`` definition.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from annostats.align import ABSENT, Label, LabelExtractor, SpanKeyExtractor, align
from annostats.utils.logging import get_logger

from .confusion import ConfusionTable

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PRF:
    """Counts and scores for a single label or an aggregate.

    On the macro aggregate only the ratios are averaged; its counts are the
    micro totals.
    """

    tp: int
    fp: int
    fn: int
    tn: int
    precision: float
    recall: float
    f1: float
    reference: int
    predicted: int


@dataclass(frozen=True, slots=True)
class MetricsReport:
    """Snapshot of per-label, micro and macro metrics."""

    per_label: dict[Label, PRF]
    micro: PRF
    macro: PRF
    confusion: ConfusionTable


# ---------------------------------------------------------------------------
# Formula helpers
# ---------------------------------------------------------------------------


def safe_ratio(numerator: int, denominator: int) -> float:
    """Return ``numerator / denominator`` or ``1.0`` for an empty denominator."""

    return numerator / denominator if denominator else 1.0


def f_measure(precision: float, recall: float, beta: float = 1.0) -> float:
    """Weighted harmonic mean of ``precision`` and ``recall``."""

    beta2 = beta * beta
    denominator = beta2 * precision + recall
    if denominator == 0.0:
        return 0.0
    return (1.0 + beta2) * precision * recall / denominator


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class AnnotationStatistics:
    """Accumulate alignments and report precision, recall and F-measure.

    Pass ``label=None`` (the default) to any query for the micro aggregate over
    all labels, or a label for that label alone.  In span-only mode every
    present item carries :data:`~annostats.align.SPAN`, so the aggregate is
    ``matched / predicted`` for precision and ``matched / reference`` for
    recall.

    Span-only tables keep presence apart: ``(SPAN, SPAN)`` holds matched keys,
    ``(SPAN, ABSENT)`` and ``(ABSENT, SPAN)`` the keys found on one side only.
    The number of aligned keys as a single figure is ``confusions().total()``.
    """

    def __init__(self) -> None:
        self._table = ConfusionTable()

    def add(
        self,
        reference: Iterable[Any],
        predicted: Iterable[Any],
        span_key: SpanKeyExtractor | None = None,
        label: LabelExtractor | None = None,
    ) -> int:
        """Align one unit of comparison and accumulate it.

        Returns the number of observations recorded.  Extraction errors
        propagate and leave the accumulated counts untouched.
        """

        observations = align(reference, predicted, span_key=span_key, label=label)
        self._table.add_all(observations)
        logger.debug("added %d observations (total %d)", len(observations), self._table.total())
        return len(observations)

    # -- merging ------------------------------------------------------------

    def merge(self, other: AnnotationStatistics) -> None:
        """Fold the counts accumulated by ``other`` into this instance."""

        self._table.update(other._table)

    def __add__(self, other: object) -> AnnotationStatistics:
        if not isinstance(other, AnnotationStatistics):
            return NotImplemented
        return AnnotationStatistics.add_all([self, other])

    @classmethod
    def add_all(cls, statistics: Iterable[AnnotationStatistics]) -> AnnotationStatistics:
        """Return a new instance holding the summed counts of ``statistics``."""

        merged = cls()
        for stats in statistics:
            merged.merge(stats)
        return merged

    @classmethod
    def from_table(cls, table: ConfusionTable) -> AnnotationStatistics:
        stats = cls()
        stats._table = table.copy()
        return stats

    def confusions(self) -> ConfusionTable:
        """Return a copy of the accumulated confusion table."""

        return self._table.copy()

    # -- labels ---------------------------------------------------------------

    def labels(self) -> list[Label]:
        """Every non-``ABSENT`` label seen on either side, sorted by ``str``."""

        return sorted(self._table.labels(), key=str)

    def reference_labels(self) -> list[Label]:
        """Labels seen on the reference side at least once, sorted by ``str``."""

        return sorted(self._table.actual_labels(), key=str)

    # -- counts ---------------------------------------------------------------

    def count_reference(self, label: Label | None = None) -> int:
        if label is None:
            return self._table.total() - self._table.row_total(ABSENT)
        return self._table.row_total(label)

    def count_predicted(self, label: Label | None = None) -> int:
        if label is None:
            return self._table.total() - self._table.column_total(ABSENT)
        return self._table.column_total(label)

    def count_correct(self, label: Label | None = None) -> int:
        if label is None:
            return sum(self._table.count(lbl, lbl) for lbl in self._table.actual_labels())
        return self._table.count(label, label)

    def count_true_positives(self, label: Label) -> int:
        return self._table.count(label, label)

    def count_false_positives(self, label: Label) -> int:
        return self._table.column_total(label) - self._table.count(label, label)

    def count_false_negatives(self, label: Label) -> int:
        return self._table.row_total(label) - self._table.count(label, label)

    def count_true_negatives(self, label: Label) -> int:
        # Only the other labels' diagonal counts; see the module docstring.
        return sum(
            self._table.count(other, other) for other in self._table.labels() if other != label
        )

    # -- scores ---------------------------------------------------------------

    def precision(self, label: Label | None = None) -> float:
        return safe_ratio(self.count_correct(label), self.count_predicted(label))

    def recall(self, label: Label | None = None) -> float:
        return safe_ratio(self.count_correct(label), self.count_reference(label))

    def f(self, beta: float = 1.0, label: Label | None = None) -> float:
        return f_measure(self.precision(label), self.recall(label), beta)

    def f1(self, label: Label | None = None) -> float:
        return self.f(1.0, label)

    def macro_precision(self) -> float:
        return self._macro("precision")

    def macro_recall(self) -> float:
        return self._macro("recall")

    def macro_f1(self) -> float:
        return self._macro("f1")

    def _macro(self, metric: str) -> float:
        labels = self._table.actual_labels()
        if not labels:
            return float(getattr(self, metric)())
        return sum(getattr(self, metric)(lbl) for lbl in labels) / len(labels)

    # -- reporting -----------------------------------------------------------

    def _prf(self, label: Label) -> PRF:
        return PRF(
            tp=self.count_true_positives(label),
            fp=self.count_false_positives(label),
            fn=self.count_false_negatives(label),
            tn=self.count_true_negatives(label),
            precision=self.precision(label),
            recall=self.recall(label),
            f1=self.f1(label),
            reference=self.count_reference(label),
            predicted=self.count_predicted(label),
        )

    def report(self) -> MetricsReport:
        """Return a snapshot of every metric derived from the current table."""

        per_label = {lbl: self._prf(lbl) for lbl in self.labels()}
        correct = self.count_correct()
        reference = self.count_reference()
        predicted = self.count_predicted()
        micro = PRF(
            tp=correct,
            fp=predicted - correct,
            fn=reference - correct,
            tn=0,
            precision=self.precision(),
            recall=self.recall(),
            f1=self.f1(),
            reference=reference,
            predicted=predicted,
        )
        macro = PRF(
            tp=correct,
            fp=predicted - correct,
            fn=reference - correct,
            tn=0,
            precision=self.macro_precision(),
            recall=self.macro_recall(),
            f1=self.macro_f1(),
            reference=reference,
            predicted=predicted,
        )
        return MetricsReport(per_label, micro, macro, self.confusions())

    def __repr__(self) -> str:
        return (
            f"AnnotationStatistics(reference={self.count_reference()}, "
            f"predicted={self.count_predicted()}, correct={self.count_correct()})"
        )


__all__ = ["PRF", "MetricsReport", "AnnotationStatistics", "safe_ratio", "f_measure"]

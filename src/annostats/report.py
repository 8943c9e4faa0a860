"""Rendering of metric reports for display.

The renderers return strings or plain mappings; writing them anywhere is left
to the caller.  Sentinel labels render as their ``<none>`` / ``<span>`` values.
"""

from __future__ import annotations

from typing import Any

from annostats.align import ABSENT, Label
from annostats.score import PRF, ConfusionTable, MetricsReport

_HEADER = ("P", "R", "F1", "#gold", "#system", "#correct")


def _row(prf: PRF, name: str, digits: int) -> str:
    cells = [
        f"{prf.precision:.{digits}f}",
        f"{prf.recall:.{digits}f}",
        f"{prf.f1:.{digits}f}",
        str(prf.reference),
        str(prf.predicted),
        str(prf.tp),
        name,
    ]
    return "\t".join(cells)


def format_table(report: MetricsReport, *, digits: int = 3, macro: bool = False) -> str:
    """Return a tab separated table with an ``OVERALL`` row then one row per label."""

    lines = ["\t".join(_HEADER)]
    lines.append(_row(report.micro, "OVERALL", digits))
    if macro:
        lines.append(_row(report.macro, "MACRO", digits))
    for label, prf in report.per_label.items():
        lines.append(_row(prf, str(label), digits))
    return "\n".join(lines) + "\n"


def format_confusion(table: ConfusionTable) -> str:
    """Return the confusion counts as a matrix; rows are reference labels."""

    labels: list[Label] = sorted(table.labels(), key=str)
    axis = labels + [ABSENT]
    width = max([len(str(lbl)) for lbl in axis] + [len(str(table.total()))])
    lines = [" " * width + " | " + " ".join(f"{str(lbl):>{width}}" for lbl in axis)]
    for actual in axis:
        counts = " ".join(f"{table.count(actual, pred):>{width}}" for pred in axis)
        lines.append(f"{str(actual):>{width}} | {counts}")
    return "\n".join(lines) + "\n"


def _prf_to_dict(prf: PRF) -> dict[str, Any]:
    return {
        "precision": prf.precision,
        "recall": prf.recall,
        "f1": prf.f1,
        "tp": prf.tp,
        "fp": prf.fp,
        "fn": prf.fn,
        "tn": prf.tn,
        "reference": prf.reference,
        "predicted": prf.predicted,
    }


def report_to_dict(report: MetricsReport) -> dict[str, Any]:
    """Return a JSON serialisable view of ``report``."""

    return {
        "micro": _prf_to_dict(report.micro),
        "macro": {k: getattr(report.macro, k) for k in ("precision", "recall", "f1")},
        "per_label": {str(lbl): _prf_to_dict(prf) for lbl, prf in report.per_label.items()},
        "confusion": [
            {"actual": str(obs.actual), "predicted": str(obs.predicted), "count": n}
            for obs, n in sorted(report.confusion.items(), key=lambda kv: tuple(map(str, kv[0])))
        ],
    }


__all__ = ["format_table", "format_confusion", "report_to_dict"]

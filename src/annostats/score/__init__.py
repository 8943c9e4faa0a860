"""Scoring: the confusion table and the accumulating statistics engine."""

from .confusion import ConfusionTable
from .statistics import PRF, AnnotationStatistics, MetricsReport, f_measure, safe_ratio

__all__ = [
    "ConfusionTable",
    "PRF",
    "AnnotationStatistics",
    "MetricsReport",
    "f_measure",
    "safe_ratio",
]

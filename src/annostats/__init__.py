"""Annotation alignment and scoring.

Align a reference and a predicted collection of labeled spans by span key,
accumulate a confusion table across any number of comparisons and derive
precision, recall, F-measure and per-label TP/FP/TN/FN counts from it.
"""

from .align import ABSENT, SPAN, Observation, Sentinel, align
from .score import PRF, AnnotationStatistics, ConfusionTable, MetricsReport

__version__ = "0.1.0"

__all__ = [
    "ABSENT",
    "SPAN",
    "Observation",
    "Sentinel",
    "align",
    "PRF",
    "AnnotationStatistics",
    "ConfusionTable",
    "MetricsReport",
    "__version__",
]

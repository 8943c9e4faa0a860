from __future__ import annotations

import json

from annostats import ABSENT, AnnotationStatistics
from annostats.report import format_confusion, format_table, report_to_dict


def _stats() -> AnnotationStatistics:
    stats = AnnotationStatistics()
    ref = [(1, "A"), (2, "A"), (3, "B")]
    pred = [(1, "A"), (2, "B"), (4, "B")]
    stats.add(ref, pred, lambda t: t[0], lambda t: t[1])
    return stats


def test_format_table() -> None:
    text = format_table(_stats().report(), digits=2)
    lines = text.splitlines()
    assert lines[0] == "P\tR\tF1\t#gold\t#system\t#correct"
    assert lines[1] == "0.33\t0.33\t0.33\t3\t3\t1\tOVERALL"
    assert lines[2].endswith("\tA")
    assert lines[2].startswith("1.00\t0.50\t0.67\t2\t1\t1")
    assert lines[3].endswith("\tB")
    assert len(lines) == 4


def test_format_table_macro_row() -> None:
    text = format_table(_stats().report(), macro=True)
    assert "\tMACRO" in text.splitlines()[2]


def test_format_confusion() -> None:
    text = format_confusion(_stats().confusions())
    rows = [line.split("|") for line in text.splitlines()]
    header = rows[0][1].split()
    assert header == ["A", "B", str(ABSENT)]
    a_row = rows[1][1].split()
    assert rows[1][0].strip() == "A"
    assert a_row == ["1", "1", "0"]
    none_row = rows[3][1].split()
    assert none_row == ["0", "1", "0"]


def test_report_to_dict_is_json_ready() -> None:
    data = report_to_dict(_stats().report())
    encoded = json.loads(json.dumps(data))
    assert encoded["micro"]["tp"] == 1
    assert set(encoded["per_label"]) == {"A", "B"}
    assert {"actual": "<none>", "predicted": "B", "count": 1} in encoded["confusion"]


def test_report_to_dict_macro_has_ratios_only() -> None:
    data = report_to_dict(_stats().report())
    assert set(data["macro"]) == {"precision", "recall", "f1"}
    assert set(data["micro"]) >= {"tp", "fp", "fn", "reference", "predicted"}

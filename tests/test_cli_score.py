from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

from typer.testing import CliRunner

from annostats.cli import app

DocWriter = Callable[..., Path]


def _setup(write_doc: DocWriter) -> None:
    gold = [
        {"start": 0, "end": 1, "label": "A", "text": "1"},
        {"start": 2, "end": 3, "label": "A", "text": "2"},
        {"start": 4, "end": 5, "label": "B", "text": "3"},
    ]
    system = [
        {"start": 0, "end": 1, "label": "A", "text": "1"},
        {"start": 2, "end": 3, "label": "B", "text": "2"},
        {"start": 6, "end": 7, "label": "B", "text": "4"},
    ]
    write_doc("gold", "doc1", gold)
    write_doc("system", "doc1", system)
    write_doc("gold", "doc2", [{"start": 0, "end": 2, "label": "A", "text": "xy"}])


def test_score_table(write_doc: DocWriter, tmp_path: Path) -> None:
    _setup(write_doc)
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["score", "--reference", str(tmp_path / "gold"), "--predicted", str(tmp_path / "system")],
    )
    assert result.exit_code == 0, result.output
    lines = result.stdout.splitlines()
    assert lines[0].startswith("P\tR\tF1")
    # 1 correct of 3 predicted and 4 reference spans
    assert lines[1] == "0.333\t0.250\t0.286\t4\t3\t1\tOVERALL"


def test_score_json_span_only(write_doc: DocWriter, tmp_path: Path) -> None:
    _setup(write_doc)
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "score",
            "-r",
            str(tmp_path / "gold"),
            "-p",
            str(tmp_path / "system"),
            "--span-only",
            "--format",
            "json",
        ],
    )
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["micro"]["tp"] == 2
    assert data["micro"]["reference"] == 4
    assert data["micro"]["predicted"] == 3
    assert list(data["per_label"]) == ["<span>"]


def test_score_by_text_with_confusion(write_doc: DocWriter, tmp_path: Path) -> None:
    _setup(write_doc)
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "score",
            "-r",
            str(tmp_path / "gold" / "doc1.spans.json"),
            "-p",
            str(tmp_path / "system" / "doc1.spans.json"),
            "--span-key",
            "text",
            "--confusion",
        ],
    )
    assert result.exit_code == 0, result.output
    assert "<none>" in result.stdout
    assert "0.333\t0.333\t0.333\t3\t3\t1\tOVERALL" in result.stdout


def test_missing_input(tmp_path: Path) -> None:
    runner = CliRunner()
    missing = tmp_path / "missing.json"
    result = runner.invoke(app, ["score", "-r", str(missing), "-p", str(missing)])
    assert result.exit_code == 3
    assert str(missing) in result.stderr


def test_unsupported_extension(tmp_path: Path) -> None:
    path = tmp_path / "gold.csv"
    path.write_text("start,end\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(app, ["score", "-r", str(path), "-p", str(path)])
    assert result.exit_code == 3


def test_bad_config(write_doc: DocWriter, tmp_path: Path) -> None:
    _setup(write_doc)
    bad_cfg = tmp_path / "bad.yml"
    bad_cfg.write_text("unknown: true\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(
        app,
        [
            "score",
            "-r",
            str(tmp_path / "gold"),
            "-p",
            str(tmp_path / "system"),
            "--config",
            str(bad_cfg),
        ],
    )
    assert result.exit_code == 4


def test_bad_span_key_option(write_doc: DocWriter, tmp_path: Path) -> None:
    _setup(write_doc)
    runner = CliRunner()
    result = runner.invoke(
        app,
        ["score", "-r", str(tmp_path / "gold"), "-p", str(tmp_path / "system"), "--span-key", "x"],
    )
    assert result.exit_code == 4


def test_missing_label_is_evaluation_error(write_doc: DocWriter, tmp_path: Path) -> None:
    write_doc("gold", "d", [{"start": 0, "end": 1}])
    write_doc("system", "d", [])
    runner = CliRunner()
    result = runner.invoke(
        app, ["score", "-r", str(tmp_path / "gold"), "-p", str(tmp_path / "system")]
    )
    assert result.exit_code == 5
    assert "label" in result.stderr


def test_non_object_span_is_io_error(write_doc: DocWriter, tmp_path: Path) -> None:
    write_doc("gold", "d", [1])
    write_doc("system", "d", [])
    runner = CliRunner()
    result = runner.invoke(
        app, ["score", "-r", str(tmp_path / "gold"), "-p", str(tmp_path / "system")]
    )
    assert result.exit_code == 3


def test_undecodable_file_is_io_error(tmp_path: Path) -> None:
    path = tmp_path / "gold.json"
    path.write_bytes(b"\xff")
    runner = CliRunner()
    result = runner.invoke(app, ["score", "-r", str(path), "-p", str(path)])
    assert result.exit_code == 3


def test_unhashable_label_is_evaluation_error(write_doc: DocWriter, tmp_path: Path) -> None:
    write_doc("gold", "d", [{"start": 0, "end": 1, "label": ["A"]}])
    write_doc("system", "d", [])
    runner = CliRunner()
    result = runner.invoke(
        app, ["score", "-r", str(tmp_path / "gold"), "-p", str(tmp_path / "system")]
    )
    assert result.exit_code == 5
    assert "hashable" in result.stderr

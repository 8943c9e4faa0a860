"""Shared test fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

DocWriter = Callable[[str, str, list[dict[str, object]]], Path]


@pytest.fixture
def write_doc(tmp_path: Path) -> DocWriter:
    """Return a helper writing ``<subdir>/<doc>.spans.json`` under ``tmp_path``."""

    def _write(subdir: str, doc: str, spans: list[dict[str, object]]) -> Path:
        folder = tmp_path / subdir
        folder.mkdir(exist_ok=True)
        path = folder / f"{doc}.spans.json"
        path.write_text(json.dumps({"doc": doc, "spans": spans}), encoding="utf-8")
        return path

    return _write

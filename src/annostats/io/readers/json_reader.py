"""Readers for ``.json`` and ``.jsonl`` span annotation files.

A ``.json`` file holds one document object ``{"doc": ..., "spans": [...]}`` or
a list of such objects.  A ``.jsonl`` file holds one document object per
non-blank line.  Documents without a ``doc`` name are named after the file,
suffixed with the line number for ``.jsonl`` input.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from annostats.utils.errors import IOFormatError

from ..documents import AnnotatedDocument


def _doc_stem(path: Path) -> str:
    name = path.name
    for suffix in (".spans.json", ".jsonl", ".json"):
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return path.stem


def read_json(path: str | os.PathLike[str], encoding: str = "utf-8") -> list[AnnotatedDocument]:
    """Read documents from a ``.json`` file."""

    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding=encoding))
    except UnicodeDecodeError as exc:
        raise IOFormatError(f"{p}: not valid {encoding} ({exc.reason})") from None
    except json.JSONDecodeError as exc:
        raise IOFormatError(f"{p}: invalid JSON ({exc.msg} at line {exc.lineno})") from None
    items = data if isinstance(data, list) else [data]
    docs: list[AnnotatedDocument] = []
    for item in items:
        if not isinstance(item, dict):
            raise IOFormatError(f"{p}: expected a document object, got {type(item).__name__}")
        docs.append(AnnotatedDocument.from_dict(item, default_doc=_doc_stem(p)))
    return docs


def read_jsonl(path: str | os.PathLike[str], encoding: str = "utf-8") -> list[AnnotatedDocument]:
    """Read one document per line from a ``.jsonl`` file."""

    p = Path(path)
    docs: list[AnnotatedDocument] = []
    try:
        text = p.read_text(encoding=encoding)
    except UnicodeDecodeError as exc:
        raise IOFormatError(f"{p}: not valid {encoding} ({exc.reason})") from None
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            item = json.loads(line)
        except json.JSONDecodeError as exc:
            raise IOFormatError(f"{p}:{lineno}: invalid JSON ({exc.msg})") from None
        if not isinstance(item, dict):
            raise IOFormatError(f"{p}:{lineno}: expected a document object")
        docs.append(AnnotatedDocument.from_dict(item, default_doc=f"{_doc_stem(p)}:{lineno}"))
    return docs


__all__ = ["read_json", "read_jsonl"]

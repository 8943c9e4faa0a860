"""Extension based registry for span annotation files.

``.json`` and ``.jsonl`` readers are registered by default.  The registry
dispatches on the file extension; :func:`load_documents` additionally accepts a
directory and reads every registered file inside it in name order.

``UnsupportedFormatError`` is raised when attempting to read a file whose
extension has no registered handler.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Callable

from ..utils.errors import UnsupportedFormatError
from .documents import AnnotatedDocument, Annotation, pair_documents
from .readers.json_reader import read_json, read_jsonl

ReaderFunc = Callable[..., list[AnnotatedDocument]]

_READERS: dict[str, ReaderFunc] = {}


def register_reader(ext: str, func: ReaderFunc) -> None:
    """Register a reader for files ending with ``ext``.

    Parameters
    ----------
    ext:
        File extension including the dot (e.g. ``".json"``).  Matching is
        case-insensitive.
    func:
        Callable that reads a file and returns a list of documents.
    """

    _READERS[ext.lower()] = func


def get_extension(path: str | os.PathLike[str]) -> str:
    """Return the lower-cased file extension of ``path`` (including the dot)."""

    suffix = Path(path).suffix
    return suffix.lower() if suffix else ""


def read_annotations(path: str | os.PathLike[str], **kwargs: Any) -> list[AnnotatedDocument]:
    """Read ``path`` using the registered reader for its extension.

    Raises
    ------
    UnsupportedFormatError
        If no reader is registered for the file extension.
    """

    ext = get_extension(path)
    reader = _READERS.get(ext)
    if reader is None:
        raise UnsupportedFormatError(f"Unsupported file extension: '{ext}'") from None
    return reader(path, **kwargs)


def load_documents(path: str | os.PathLike[str], **kwargs: Any) -> list[AnnotatedDocument]:
    """Read documents from a file or from every readable file in a directory."""

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"No such file or directory: '{p}'")
    if not p.is_dir():
        return read_annotations(p, **kwargs)
    docs: list[AnnotatedDocument] = []
    for child in sorted(p.iterdir()):
        if child.is_file() and get_extension(child) in _READERS:
            docs.extend(read_annotations(child, **kwargs))
    return docs


register_reader(".json", read_json)
register_reader(".jsonl", read_jsonl)

__all__ = [
    "Annotation",
    "AnnotatedDocument",
    "ReaderFunc",
    "register_reader",
    "get_extension",
    "read_annotations",
    "load_documents",
    "pair_documents",
]

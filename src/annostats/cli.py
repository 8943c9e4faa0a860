"""Typer-based command line interface for scoring span annotations.

The ``score`` command reads reference and predicted annotation documents, pairs
them by document name, accumulates one alignment per document and prints the
resulting metrics to stdout.

Exit codes
----------
0 success
3 I/O error (missing file, unsupported or malformed annotation file)
4 configuration error
5 evaluation error (span key or label extraction failure)
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import Optional

import typer
import yaml
from pydantic import ValidationError

from .config import ConfigModel, load_config
from .extract import annotation_to_attribute, span_key_function
from .io import load_documents, pair_documents
from .report import format_confusion, format_table, report_to_dict
from .score import AnnotationStatistics
from .utils.errors import ExtractionError, IOFormatError
from .utils.logging import configure_logging, get_logger

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

logger = get_logger(__name__)

app = typer.Typer(
    name="annostats",
    help="Span annotation scoring. Use 'annostats score' to compare two annotation sets.",
)


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


def _apply_overrides(
    cfg: ConfigModel,
    *,
    span_key: str | None,
    label_field: str | None,
    span_only: bool,
    output_format: str | None,
    show_confusion: bool | None,
) -> ConfigModel:
    """Return a copy of ``cfg`` with CLI overrides applied."""

    data = cfg.model_dump()
    if span_key is not None:
        data["alignment"]["span_key"] = span_key
    if span_only:
        data["alignment"]["label_field"] = None
    elif label_field is not None:
        data["alignment"]["label_field"] = label_field
    if output_format is not None:
        data["report"]["format"] = output_format
    if show_confusion is not None:
        data["report"]["show_confusion"] = show_confusion
    return ConfigModel.model_validate(data)


@app.callback()
def main() -> None:
    """Entry point for the annostats command group."""
    pass


@app.command()
def score(  # noqa: PLR0913
    reference: Path = typer.Option(  # noqa: B008
        ..., "--reference", "-r", help="Reference (gold) annotation file or directory"
    ),
    predicted: Path = typer.Option(  # noqa: B008
        ..., "--predicted", "-p", help="Predicted annotation file or directory"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    span_key: Optional[str] = typer.Option(  # noqa: B008
        None, "--span-key", help="Align spans by [extent|text]"
    ),
    label_field: Optional[str] = typer.Option(  # noqa: B008
        None, "--label-field", help="Span field holding the label"
    ),
    span_only: bool = typer.Option(  # noqa: B008
        False, "--span-only", help="Ignore labels and score span presence only"
    ),
    output_format: Optional[str] = typer.Option(  # noqa: B008
        None, "--format", help="Output format [table|json]"
    ),
    show_confusion: bool | None = typer.Option(  # noqa: B008
        None, "--confusion/--no-confusion", help="Also print the confusion matrix"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Score ``predicted`` annotations against ``reference`` annotations."""

    try:
        cfg = load_config(config_path, env=os.environ)
        cfg = _apply_overrides(
            cfg,
            span_key=span_key,
            label_field=label_field,
            span_only=span_only,
            output_format=output_format,
            show_confusion=show_confusion,
        )
    except (ValidationError, yaml.YAMLError, OSError, ValueError) as exc:
        _safe_exit(4, str(exc).splitlines()[0])
    configure_logging("DEBUG" if verbose else cfg.logging.level)

    try:
        ref_docs = load_documents(reference)
        pred_docs = load_documents(predicted)
        pairs = pair_documents(ref_docs, pred_docs)
    except (FileNotFoundError, IOFormatError, OSError) as exc:
        _safe_exit(3, str(exc))
    logger.info("loaded %d reference and %d predicted documents", len(ref_docs), len(pred_docs))

    key_fn = span_key_function(cfg.alignment.span_key)
    label_name = cfg.alignment.label_field
    label_fn = annotation_to_attribute(label_name) if label_name is not None else None

    stats = AnnotationStatistics()
    try:
        for name, ref_spans, pred_spans in pairs:
            n = stats.add(ref_spans, pred_spans, span_key=key_fn, label=label_fn)
            logger.info("%s: %d observations", name, n)
    except ExtractionError as exc:
        _safe_exit(5, str(exc))

    report = stats.report()
    if cfg.report.format == "json":
        typer.echo(json.dumps(report_to_dict(report), indent=2, sort_keys=True))
    else:
        typer.echo(format_table(report, digits=cfg.report.digits), nl=False)
        if cfg.report.show_confusion:
            typer.echo("")
            typer.echo(format_confusion(report.confusion), nl=False)

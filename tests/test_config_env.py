from pathlib import Path
from typing import Any

import pytest
from pydantic import ValidationError

from annostats.config import load_config


def test_env_log_level(monkeypatch: Any) -> None:
    monkeypatch.setenv("ANNOSTATS_LOG_LEVEL", "debug")
    cfg = load_config()
    assert cfg.logging.level == "DEBUG"


def test_custom_env_name(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text('logging:\n  level_env: "CUSTOM_LEVEL"\n')
    cfg = load_config(cfg_file, env={"CUSTOM_LEVEL": "ERROR", "ANNOSTATS_LOG_LEVEL": "DEBUG"})
    assert cfg.logging.level == "ERROR"


def test_user_yaml_overrides(tmp_path: Path) -> None:
    cfg_file = tmp_path / "cfg.yml"
    cfg_file.write_text("alignment:\n  label_field: null\nreport:\n  digits: 4\n")
    cfg = load_config(cfg_file, env={})
    assert cfg.alignment.label_field is None
    assert cfg.alignment.span_key == "extent"
    assert cfg.report.digits == 4


@pytest.mark.parametrize(
    "body",
    [
        "unknown: true\n",
        "alignment:\n  span_key: fuzzy\n",
        "report:\n  digits: -1\n",
        "logging:\n  level: LOUD\n",
    ],
)
def test_invalid_config_rejected(tmp_path: Path, body: str) -> None:
    cfg_file = tmp_path / "bad.yml"
    cfg_file.write_text(body)
    with pytest.raises(ValidationError):
        load_config(cfg_file, env={})

"""Tests for the compute_layout_from_json script."""

from __future__ import annotations

import json
import runpy
import sys
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "compute_layout_from_json.py"


def run_script(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", [str(SCRIPT), *args])
    runpy.run_path(str(SCRIPT), run_name="__main__")


def test_writes_layout_result(tmp_path, monkeypatch):
    request = tmp_path / "request.json"
    out = tmp_path / "result.json"
    request.write_text(json.dumps({
        "canvas": {"width": 960, "height": 540},
        "content": [{"type": "title", "text": "Hello"}],
    }))

    run_script(monkeypatch, str(request), "--out", str(out), "--level", "AAA")

    result = json.loads(out.read_text())
    assert len(result["positioned_elements"]) == 1
    assert result["breakpoint"]["key"] == "md"


def test_invalid_request_exits_with_error(tmp_path, monkeypatch, capsys):
    request = tmp_path / "request.json"
    request.write_text(json.dumps({"content": []}))

    with pytest.raises(SystemExit) as excinfo:
        run_script(monkeypatch, str(request))
    assert excinfo.value.code == 2
    assert "Invalid layout request" in capsys.readouterr().err

from __future__ import annotations

import argparse
import io
import json
from pathlib import Path

from rich.console import Console

from spec_simplifier.__main__ import main
from spec_simplifier.cli.args import parse_args
from spec_simplifier.cli.controller import EXIT_FAILED, EXIT_OK, run
from spec_simplifier.config.ini_config import IniConfig
from spec_simplifier.services.review_client import ReviewClient, ReviewResponse


# -----------------------------
# Test doubles
# -----------------------------
class FixedClient(ReviewClient):
    def __init__(self, content="simplified\n"):
        self.content = content
        self.calls = []

    def review(self, spec_content, related_content=None, *, spec_name="", spec_path=""):
        self.calls.append((spec_name, related_content))
        return ReviewResponse(new_spec_content=self.content)


# -----------------------------
# Helpers
# -----------------------------
def _touch(path: Path, text: str = "x\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _console() -> Console:
    return Console(file=io.StringIO(), force_terminal=False, width=1000)


def _settings(tmp_path: Path, text: str = ""):
    ini = tmp_path / "cfg.ini"
    ini.write_text(text, encoding="utf-8")
    return IniConfig(ini).load_settings()


def _reports(root: Path):
    return sorted(root.glob("simplify_report_*.json"))


# -----------------------------
# Tests
# -----------------------------
def test_parse_args_defaults():
    args = parse_args([])

    assert args.directory is None
    assert args.max_files is None
    assert args.ini is None


def test_missing_directory_aborts_without_report(tmp_path: Path):
    console = _console()
    args = argparse.Namespace(directory=str(tmp_path / "nope"), max_files=None)

    code = run(args, _settings(tmp_path), console=console, review_client=FixedClient())

    assert code == EXIT_FAILED
    assert "does not exist" in console.file.getvalue()
    assert _reports(tmp_path) == []


def test_full_run_rewrites_specs_and_writes_report(tmp_path: Path):
    root = tmp_path / "project"
    spec = _touch(root / "src" / "Button.spec.ts", "old\n")
    _touch(root / "src" / "Button.ts", "export const Button = 1\n")
    client = FixedClient()
    console = _console()
    args = argparse.Namespace(directory=str(root), max_files=None)

    code = run(args, _settings(tmp_path), console=console, review_client=client)

    assert code == EXIT_OK
    assert spec.read_text(encoding="utf-8") == "simplified\n"
    assert client.calls == [("Button.spec.ts", "export const Button = 1\n")]

    (report_path,) = _reports(root)
    data = json.loads(report_path.read_text(encoding="utf-8"))
    assert data["successfullyProcessed"] == 1

    out = console.file.getvalue()
    assert "Spec files with related files: 1" in out
    assert "Report generated" in out


def test_prompted_directory_is_used(tmp_path: Path, monkeypatch):
    root = tmp_path / "project"
    _touch(root / "A.spec.js")
    monkeypatch.setattr("builtins.input", lambda *a, **k: f"  {root}  ")
    args = argparse.Namespace(directory=None, max_files=None)

    code = run(args, _settings(tmp_path), console=_console(), review_client=FixedClient())

    assert code == EXIT_OK
    assert len(_reports(root)) == 1


def test_max_files_caps_processing(tmp_path: Path):
    root = tmp_path / "project"
    for i in range(4):
        _touch(root / f"d{i}" / f"F{i}.spec.js")
    client = FixedClient()
    args = argparse.Namespace(directory=str(root), max_files=None)

    run(args, _settings(tmp_path, "[run]\nmax_files = 2\n"), console=_console(), review_client=client)

    assert len(client.calls) == 2


def test_cli_flag_overrides_configured_cap(tmp_path: Path):
    root = tmp_path / "project"
    for i in range(3):
        _touch(root / f"d{i}" / f"F{i}.spec.js")
    client = FixedClient()
    args = argparse.Namespace(directory=str(root), max_files=0)

    run(args, _settings(tmp_path, "[run]\nmax_files = 1\n"), console=_console(), review_client=client)

    assert len(client.calls) == 3


def test_main_reports_config_errors(tmp_path: Path, capsys):
    code = main(["--ini", str(tmp_path / "absent.ini"), str(tmp_path)])

    assert code == EXIT_FAILED
    assert "Configuration error" in capsys.readouterr().err

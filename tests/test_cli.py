"""Command-line routing and output."""

import json
import sys

import pytest

from blendfit import main as cli


def run_cli(monkeypatch, *argv):
    monkeypatch.setenv("NO_COLOR", "1")
    monkeypatch.setattr(sys, "argv", ["blendfit", *argv])
    with pytest.raises(SystemExit) as exc:
        cli.main()
    return exc.value.code


def test_modes_lists_catalog(monkeypatch, capsys):
    assert run_cli(monkeypatch, "modes") == 0
    out = capsys.readouterr().out
    assert "Multiply" in out
    assert "Hard Mix" in out


def test_modes_json(monkeypatch, capsys):
    assert run_cli(monkeypatch, "modes", "--json") == 0
    data = json.loads(capsys.readouterr().out)
    assert len(data) == 17
    assert data[0]["name"] == "Normal"


def test_blend_json(monkeypatch, capsys):
    code = run_cli(monkeypatch, "blend", "-p", "FFFFFF:808080", "-p", "808080:404040", "-m", "multiply", "--json")
    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["mode"] == "Multiply"
    assert data["avg_error"] < 0.5


def test_levels_json(monkeypatch, capsys):
    assert run_cli(monkeypatch, "levels", "-p", "203040:203040", "--json") == 0
    data = json.loads(capsys.readouterr().out)
    assert data["mode"] == "Levels"


def test_sequence_requires_pairs(monkeypatch, capsys):
    assert run_cli(monkeypatch, "sequence") == 2
    captured = capsys.readouterr()
    assert "--pair" in captured.err
    assert "blendfit sequence -h" in captured.out


def test_unknown_command(monkeypatch, capsys):
    assert run_cli(monkeypatch, "sparkle") == 2
    assert "unrecognized command" in capsys.readouterr().err


def test_version(monkeypatch, capsys):
    assert run_cli(monkeypatch, "--version") == 0
    assert "blendfit" in capsys.readouterr().out


def test_malformed_pair_color_is_rejected(monkeypatch, capsys):
    assert run_cli(monkeypatch, "blend", "-p", "hello:000000") == 2
    assert "invalid pair colors" in capsys.readouterr().err

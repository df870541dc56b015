"""Tests for the evidencectl CLI."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from evidencecore.cli import cli
from evidencecore.signatures import SignatureComponents


def test_split_hash():
    runner = CliRunner()
    result = runner.invoke(cli, ["split-hash", "0x" + "a" * 32 + "b" * 32])
    assert result.exit_code == 0
    assert json.loads(result.output) == ["a" * 32, "b" * 32]


def test_split_hash_invalid():
    """Test invalid input exits non-zero with an error message."""
    runner = CliRunner()
    result = runner.invoke(cli, ["split-hash", "0x1234"])
    assert result.exit_code == 1
    assert "Error:" in result.output


def test_signature_encode_decode():
    """Test encoding then decoding through the CLI."""
    runner = CliRunner()
    r, s = "11" * 32, "22" * 32

    encoded = runner.invoke(cli, ["signature", "encode", "--v", "27", "--r", r, "--s", s])
    assert encoded.exit_code == 0
    token = encoded.output.strip()
    assert token == SignatureComponents(v=27, r=r, s=s).serialize()

    decoded = runner.invoke(cli, ["signature", "decode", token])
    assert decoded.exit_code == 0
    assert json.loads(decoded.output) == {"v": 27, "r": "0x" + r, "s": "0x" + s}


def test_signature_decode_invalid():
    runner = CliRunner()
    result = runner.invoke(cli, ["signature", "decode", "AAAA"])
    assert result.exit_code == 1


def test_config_show(tmp_path: Path):
    path = tmp_path / "engine.yaml"
    path.write_text("receipt_timeout: 30\n")

    runner = CliRunner()
    result = runner.invoke(cli, ["config", "show", "--config", str(path)])
    assert result.exit_code == 0
    assert json.loads(result.output)["receipt_timeout"] == 30.0


def test_config_show_from_env(monkeypatch):
    monkeypatch.setenv("EVIDENCECORE_SIGNATURE_ALIGNMENT", "positional")
    runner = CliRunner()
    result = runner.invoke(cli, ["config", "show"])
    assert result.exit_code == 0
    assert json.loads(result.output)["signature_alignment"] == "positional"


def test_config_show_invalid_timeout(tmp_path: Path):
    """Test a bad timeout in YAML is reported, not raised as a traceback."""
    path = tmp_path / "engine.yaml"
    path.write_text("receipt_timeout: abc\n")

    runner = CliRunner()
    result = runner.invoke(cli, ["config", "show", "--config", str(path)])
    assert result.exit_code == 1
    assert "Error:" in result.output
    assert "receipt_timeout" in result.output

"""Tests for engine configuration."""

from pathlib import Path

import pytest

from evidencecore.config import DEFAULT_RECEIPT_TIMEOUT, EngineConfig, SignatureAlignment
from evidencecore.errors import ConfigError


def test_default_config():
    """Test defaults."""
    config = EngineConfig()
    assert config.receipt_timeout == DEFAULT_RECEIPT_TIMEOUT
    assert config.signature_alignment is SignatureAlignment.POSITIONAL
    assert config.evidence_factory_address is None
    assert config.did_method == "weid"


def test_config_validation():
    """Test invalid values raise ConfigError."""
    with pytest.raises(ConfigError, match="receipt_timeout"):
        EngineConfig(receipt_timeout=0)

    with pytest.raises(ConfigError, match="signature_alignment"):
        EngineConfig(signature_alignment="sideways")  # type: ignore[arg-type]

    with pytest.raises(ConfigError, match="evidence_factory_address"):
        EngineConfig(evidence_factory_address="0x1234")

    with pytest.raises(ConfigError, match="did_method"):
        EngineConfig(did_method="did:weid")


def test_alignment_from_string():
    config = EngineConfig(signature_alignment="positional")  # type: ignore[arg-type]
    assert config.signature_alignment is SignatureAlignment.POSITIONAL


def test_config_from_env(monkeypatch):
    """Test loading from environment variables."""
    monkeypatch.setenv("EVIDENCECORE_RECEIPT_TIMEOUT", "2.5")
    monkeypatch.setenv("EVIDENCECORE_SIGNATURE_ALIGNMENT", "POSITIONAL")
    monkeypatch.setenv("EVIDENCECORE_FACTORY_ADDRESS", "0x" + "AB" * 20)
    monkeypatch.setenv("EVIDENCECORE_DID_METHOD", "test")

    config = EngineConfig.from_env()
    assert config.receipt_timeout == 2.5
    assert config.signature_alignment is SignatureAlignment.POSITIONAL
    assert config.evidence_factory_address == "0x" + "ab" * 20
    assert config.did_method == "test"


def test_config_from_env_invalid_timeout(monkeypatch):
    monkeypatch.setenv("EVIDENCECORE_RECEIPT_TIMEOUT", "soon")
    with pytest.raises(ConfigError, match="EVIDENCECORE_RECEIPT_TIMEOUT"):
        EngineConfig.from_env()


def test_config_from_yaml(tmp_path: Path):
    """Test loading from a YAML file."""
    path = tmp_path / "engine.yaml"
    path.write_text("receipt_timeout: 20\nsignature_alignment: positional\n")

    config = EngineConfig.from_yaml(path)
    assert config.receipt_timeout == 20.0
    assert config.signature_alignment is SignatureAlignment.POSITIONAL


def test_config_from_yaml_not_mapping(tmp_path: Path):
    path = tmp_path / "engine.yaml"
    path.write_text("- just\n- a list\n")
    with pytest.raises(ConfigError, match="mapping"):
        EngineConfig.from_yaml(path)


def test_config_roundtrip():
    """Test to_dict/from_dict roundtrip."""
    config = EngineConfig(receipt_timeout=5, evidence_factory_address="0x" + "01" * 20)
    restored = EngineConfig.from_dict(config.to_dict())
    assert restored == config


def test_by_slot_is_opt_in():
    """Test the by-slot alignment is only used when asked for."""
    assert EngineConfig.from_dict({}).signature_alignment is SignatureAlignment.POSITIONAL
    config = EngineConfig.from_dict({"signature_alignment": "by_slot"})
    assert config.signature_alignment is SignatureAlignment.BY_SLOT


def test_config_from_dict_invalid_timeout():
    """Test non-numeric timeouts raise ConfigError."""
    with pytest.raises(ConfigError, match="receipt_timeout"):
        EngineConfig.from_dict({"receipt_timeout": "abc"})

    with pytest.raises(ConfigError, match="receipt_timeout"):
        EngineConfig.from_dict({"receipt_timeout": [1, 2]})


def test_config_from_yaml_invalid_timeout(tmp_path: Path):
    path = tmp_path / "engine.yaml"
    path.write_text("receipt_timeout: abc\n")
    with pytest.raises(ConfigError, match="receipt_timeout"):
        EngineConfig.from_yaml(path)

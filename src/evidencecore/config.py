"""
Configuration for the evidence engine.

Supports:
- Environment variable configuration
- YAML file configuration
- Per-call timeout overrides (passed to the engine operations)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from evidencecore.codec import normalize_address
from evidencecore.errors import CodecError, ConfigError

# Seconds to wait for a receipt or a read result
DEFAULT_RECEIPT_TIMEOUT = 13.0


class SignatureAlignment(Enum):
    """How signatures are matched to signers when reading a record."""

    POSITIONAL = "positional"    # Zip unsigned-filtered signatures against signers by position
    BY_SLOT = "by_slot"          # Opt-in: signature goes to the signer at the same ledger index


@dataclass
class EngineConfig:
    """
    Configuration for EvidenceEngine.

    Defaults:
    - receipt_timeout: 13 seconds
    - signature_alignment: POSITIONAL
    - did_method: "weid"
    """

    receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT
    signature_alignment: SignatureAlignment = SignatureAlignment.POSITIONAL
    evidence_factory_address: str | None = None
    did_method: str = "weid"

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.receipt_timeout <= 0:
            raise ConfigError(f"receipt_timeout must be > 0, got {self.receipt_timeout}")

        if isinstance(self.signature_alignment, str):
            self.signature_alignment = _parse_alignment(self.signature_alignment)

        if self.evidence_factory_address:
            try:
                self.evidence_factory_address = normalize_address(self.evidence_factory_address)
            except CodecError as e:
                raise ConfigError(f"evidence_factory_address: {e}") from e

        if not self.did_method or ":" in self.did_method:
            raise ConfigError(f"did_method must be a bare method name, got {self.did_method!r}")

    @classmethod
    def from_env(cls) -> EngineConfig:
        """
        Create configuration from environment variables.

        Environment variables:
            EVIDENCECORE_RECEIPT_TIMEOUT: Seconds to wait per operation
            EVIDENCECORE_SIGNATURE_ALIGNMENT: positional or by_slot
            EVIDENCECORE_FACTORY_ADDRESS: Evidence factory contract address
            EVIDENCECORE_DID_METHOD: DID method of signer identities
        """
        timeout_str = os.getenv("EVIDENCECORE_RECEIPT_TIMEOUT", str(DEFAULT_RECEIPT_TIMEOUT))
        try:
            timeout = float(timeout_str)
        except ValueError:
            raise ConfigError(f"Invalid EVIDENCECORE_RECEIPT_TIMEOUT: {timeout_str!r}")

        return cls(
            receipt_timeout=timeout,
            signature_alignment=_parse_alignment(
                os.getenv("EVIDENCECORE_SIGNATURE_ALIGNMENT", SignatureAlignment.POSITIONAL.value)
            ),
            evidence_factory_address=os.getenv("EVIDENCECORE_FACTORY_ADDRESS") or None,
            did_method=os.getenv("EVIDENCECORE_DID_METHOD", "weid"),
        )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineConfig:
        """Create configuration from dictionary (e.g., YAML)."""
        raw_timeout = data.get("receipt_timeout", DEFAULT_RECEIPT_TIMEOUT)
        try:
            timeout = float(raw_timeout)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid receipt_timeout: {raw_timeout!r}")

        return cls(
            receipt_timeout=timeout,
            signature_alignment=_parse_alignment(
                data.get("signature_alignment", SignatureAlignment.POSITIONAL.value)
            ),
            evidence_factory_address=data.get("evidence_factory_address"),
            did_method=data.get("did_method", "weid"),
        )

    @classmethod
    def from_yaml(cls, path: Path) -> EngineConfig:
        """Load configuration from a YAML file.

        Example YAML:
            receipt_timeout: 20
            signature_alignment: by_slot
            evidence_factory_address: "0x8f1c...e2"
        """
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration in {path} must be a mapping")
        return cls.from_dict(data)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "receipt_timeout": self.receipt_timeout,
            "signature_alignment": self.signature_alignment.value,
            "evidence_factory_address": self.evidence_factory_address,
            "did_method": self.did_method,
        }


def _parse_alignment(value: str | SignatureAlignment) -> SignatureAlignment:
    if isinstance(value, SignatureAlignment):
        return value
    try:
        return SignatureAlignment(str(value).lower())
    except ValueError:
        choices = ", ".join(a.value for a in SignatureAlignment)
        raise ConfigError(f"signature_alignment must be one of {choices}, got {value!r}")

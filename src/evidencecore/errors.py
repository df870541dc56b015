"""Exception hierarchy for evidencecore."""

from __future__ import annotations


class EvidenceError(Exception):
    """Base error for evidence processing."""
    pass


class CodecError(EvidenceError):
    """Value cannot be converted to or from its ledger encoding."""
    pass


class SignatureFormatError(EvidenceError):
    """Serialized signature token is malformed."""
    pass


class LedgerError(EvidenceError):
    """Ledger client failed on the submission path."""
    pass


class ConfigError(EvidenceError):
    """Invalid engine configuration."""
    pass

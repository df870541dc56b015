"""Evidence Lifecycle Engine.

Anchors signed evidence records on a permissioned ledger and lets several
parties co-sign the same record over time.
"""

from __future__ import annotations

__version__ = "0.1.0"

from evidencecore.config import EngineConfig, SignatureAlignment
from evidencecore.engine import EvidenceEngine
from evidencecore.errors import (
    CodecError,
    ConfigError,
    EvidenceError,
    LedgerError,
    SignatureFormatError,
)
from evidencecore.models import EvidenceInfo, EvidenceSignInfo, ResponseData, TransactionInfo
from evidencecore.results import ErrorCode, Outcome
from evidencecore.signatures import SignatureComponents

__all__ = [
    "__version__",
    "CodecError",
    "ConfigError",
    "EngineConfig",
    "ErrorCode",
    "EvidenceEngine",
    "EvidenceError",
    "EvidenceInfo",
    "EvidenceSignInfo",
    "LedgerError",
    "Outcome",
    "ResponseData",
    "SignatureAlignment",
    "SignatureComponents",
    "SignatureFormatError",
    "TransactionInfo",
]

"""Result codes for evidence operations.

Contract-level results arrive as integers embedded in ledger event logs.
They are decoded once here into EventCode and mapped onto ErrorCode, so
raw integers never leave this module.
"""

from __future__ import annotations

import logging
from enum import Enum, IntEnum

from evidencecore.codec import is_empty_address

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Failure taxonomy surfaced to callers."""

    SUCCESS = "success"
    TIMEOUT = "timeout"
    EXECUTION_FAILURE = "execution_failure"
    CONTRACT_REJECTION = "contract_rejection"
    DECODING_FAILURE = "decoding_failure"


class ErrorCode(IntEnum):
    """Stable numeric error codes returned with every response."""

    SUCCESS = 0
    CREDENTIAL_EVIDENCE_BASE_ERROR = 100500
    TRANSACTION_TIMEOUT = 160001
    TRANSACTION_EXECUTE_ERROR = 160002
    CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_ILLEGAL_INPUT = 500401
    CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_UNKNOWN = 500499

    @property
    def message(self) -> str:
        return _MESSAGES[self]

    @property
    def outcome(self) -> Outcome:
        return _OUTCOMES[self]

    @property
    def carries_transaction(self) -> bool:
        """Whether a write reporting this code has a confirmed transaction."""
        return self.outcome not in (Outcome.TIMEOUT, Outcome.EXECUTION_FAILURE)


_MESSAGES = {
    ErrorCode.SUCCESS: "success",
    ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR: "generic error when processing credential evidence",
    ErrorCode.TRANSACTION_TIMEOUT: "the transaction is timeout",
    ErrorCode.TRANSACTION_EXECUTE_ERROR: "the transaction was not correctly executed",
    ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_ILLEGAL_INPUT: "contract error: illegal input",
    ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_UNKNOWN: "contract error: unrecognised result code",
}

_OUTCOMES = {
    ErrorCode.SUCCESS: Outcome.SUCCESS,
    ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR: Outcome.DECODING_FAILURE,
    ErrorCode.TRANSACTION_TIMEOUT: Outcome.TIMEOUT,
    ErrorCode.TRANSACTION_EXECUTE_ERROR: Outcome.EXECUTION_FAILURE,
    ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_ILLEGAL_INPUT: Outcome.CONTRACT_REJECTION,
    ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_UNKNOWN: Outcome.CONTRACT_REJECTION,
}


class EventCode(Enum):
    """Result codes the evidence contracts embed in their event logs."""

    SUCCESS = 0
    ILLEGAL_INPUT = 500401
    UNKNOWN = -1

    @classmethod
    def decode(cls, raw: int) -> EventCode:
        """Decode a raw embedded code; anything unrecognised is UNKNOWN."""
        try:
            return cls(int(raw))
        except ValueError:
            return cls.UNKNOWN


def interpret_create_event(raw_code: int, address: str | None) -> ErrorCode:
    """Classify the event emitted when an evidence record is created."""
    code = EventCode.decode(raw_code)
    if code is EventCode.ILLEGAL_INPUT:
        return ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_ILLEGAL_INPUT
    if code is EventCode.UNKNOWN:
        logger.warning(f"Create evidence event carried unrecognised code {raw_code}")
        return ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_UNKNOWN
    if is_empty_address(address):
        return ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR
    return ErrorCode.SUCCESS


def interpret_update_event(raw_code: int) -> ErrorCode:
    """Classify the event emitted by add-signature or set-hash.

    Only illegal input is reported as a rejection. Other non-zero codes
    are accepted as success for compatibility with records written by
    earlier clients.
    """
    code = EventCode.decode(raw_code)
    if code is EventCode.ILLEGAL_INPUT:
        return ErrorCode.CREDENTIAL_EVIDENCE_CONTRACT_FAILURE_ILLEGAL_INPUT
    if code is EventCode.UNKNOWN:
        logger.warning(f"Evidence update event carried unrecognised code {raw_code}, treating as success")
    return ErrorCode.SUCCESS

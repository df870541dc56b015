"""Data structures returned by the evidence engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from evidencecore.codec import HEX_PREFIX
from evidencecore.results import ErrorCode, Outcome

T = TypeVar("T")


@dataclass
class EvidenceSignInfo:
    """One signer's entry in an evidence record.

    Attributes:
        signature: Base64 signature token
        timestamp: Not populated by the current contracts
    """

    signature: str
    timestamp: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"signature": self.signature, "timestamp": self.timestamp}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EvidenceSignInfo:
        return cls(signature=data["signature"], timestamp=data.get("timestamp"))


@dataclass
class EvidenceInfo:
    """Full signed state of an evidence record, rebuilt on every read."""

    credential_hash: str = HEX_PREFIX
    signers: list[str] = field(default_factory=list)
    sign_info: dict[str, EvidenceSignInfo] = field(default_factory=dict)

    @property
    def signatures(self) -> dict[str, str]:
        """Signer identity to signature token."""
        return {signer: info.signature for signer, info in self.sign_info.items()}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "credential_hash": self.credential_hash,
            "signers": list(self.signers),
            "sign_info": {k: v.to_dict() for k, v in self.sign_info.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EvidenceInfo:
        """Create from dictionary."""
        return cls(
            credential_hash=data.get("credential_hash", HEX_PREFIX),
            signers=list(data.get("signers", [])),
            sign_info={
                k: EvidenceSignInfo.from_dict(v)
                for k, v in data.get("sign_info", {}).items()
            },
        )


@dataclass
class Receipt:
    """Transaction receipt as returned by a ledger client."""

    transaction_hash: str
    block_number: int
    transaction_index: int = 0
    logs: list[dict[str, Any]] = field(default_factory=list)


@dataclass(frozen=True)
class TransactionInfo:
    """Metadata of a confirmed transaction, forwarded to callers."""

    block_number: int
    transaction_hash: str
    transaction_index: int = 0

    @classmethod
    def from_receipt(cls, receipt: Receipt) -> TransactionInfo:
        return cls(
            block_number=receipt.block_number,
            transaction_hash=receipt.transaction_hash,
            transaction_index=receipt.transaction_index,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "block_number": self.block_number,
            "transaction_hash": self.transaction_hash,
            "transaction_index": self.transaction_index,
        }


@dataclass
class ResponseData(Generic[T]):
    """Tagged result of an engine operation.

    Attributes:
        result: Operation value (address, flag or EvidenceInfo)
        error_code: Classification of the outcome
        transaction_info: Present only when a transaction was confirmed
    """

    result: T
    error_code: ErrorCode = ErrorCode.SUCCESS
    transaction_info: TransactionInfo | None = None

    @property
    def success(self) -> bool:
        return self.error_code is ErrorCode.SUCCESS

    @property
    def outcome(self) -> Outcome:
        return self.error_code.outcome

    @property
    def error_message(self) -> str:
        return self.error_code.message

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: Any = self.result
        if hasattr(result, "to_dict"):
            result = result.to_dict()
        return {
            "result": result,
            "error_code": int(self.error_code),
            "error_message": self.error_message,
            "outcome": self.outcome.value,
            "transaction_info": self.transaction_info.to_dict() if self.transaction_info else None,
        }

"""Ledger client capability consumed by the evidence engine.

The engine never talks to a node directly. Whoever constructs it injects a
LedgerClient that knows how to submit transactions, read contract state
and decode event logs.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Future
from typing import Any

from evidencecore.models import Receipt

# Contract operations
OP_CREATE_EVIDENCE = "createEvidence"
OP_ADD_SIGNATURE = "addSignature"
OP_SET_HASH = "setHash"
OP_GET_INFO = "getInfo"

# Event kinds and their payload fields
EVENT_CREATE_EVIDENCE = "CreateEvidenceLog"   # retCode, addr
EVENT_ADD_SIGNATURE = "AddSignatureLog"       # retCode, r, s, v
EVENT_ADD_HASH = "AddHashLog"                 # retCode, hash


class LedgerClient(ABC):
    """Abstract capability for talking to the evidence contracts.

    Encoded arguments are already ledger native: bytes32 values as 32-byte
    ``bytes``, addresses as 0x hex strings, uint8 as ``int``.
    """

    @abstractmethod
    def submit(self, operation: str, args: dict[str, Any], signing_key: Any) -> Future[Receipt]:
        """Submit a transaction signed with signing_key.

        Args:
            operation: Contract operation name (OP_* constant)
            args: Encoded arguments; mutations carry the target under "address"
            signing_key: Key used to sign the transaction

        Returns:
            Future resolving to the transaction receipt
        """
        pass

    @abstractmethod
    def read(self, operation: str, address: str) -> Future[list[Any] | None]:
        """Run a read-only call against the contract at address.

        Returns:
            Future resolving to the decoded output fields, or None
        """
        pass

    @abstractmethod
    def extract_events(self, receipt: Receipt, event_kind: str) -> list[dict[str, Any]]:
        """Decode the events of one kind from a receipt, in log order."""
        pass

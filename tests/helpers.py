"""Test helpers: well-known keys, signatures and a scripted ledger client."""

from __future__ import annotations

from concurrent.futures import Future
from typing import Any

from evidencecore.ledger import LedgerClient
from evidencecore.models import Receipt
from evidencecore.signatures import SignatureComponents

# Well-known secp256k1 test keys and their account addresses
KEY_ONE = 1
KEY_TWO = 2
ADDRESS_ONE = "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf"
ADDRESS_TWO = "0x2b5ad5c4795c026514f8317c7a215e218dccd6cf"
WEID_ONE = f"did:weid:{ADDRESS_ONE}"
WEID_TWO = f"did:weid:{ADDRESS_TWO}"

HASH = "0x" + "ab" * 32


def make_signature(v: int = 27, fill: int = 1) -> SignatureComponents:
    """Build signature components with recognisable r/s bytes."""
    return SignatureComponents(v=v, r=bytes([fill]) * 32, s=bytes([fill + 1]) * 32)


class ScriptedLedger(LedgerClient):
    """Ledger client returning canned futures, events and read results."""

    def __init__(
        self,
        receipt: Receipt | None = None,
        events: list[dict[str, Any]] | None = None,
        read_result: Any = None,
        submit_future: Future | None = None,
        read_future: Future | None = None,
    ) -> None:
        self.receipt = receipt or Receipt(transaction_hash="0xfeed", block_number=7)
        self.events = events if events is not None else []
        self.read_result = read_result
        self.submit_future = submit_future
        self.read_future = read_future
        self.submitted: list[tuple[str, dict[str, Any], Any]] = []

    def submit(self, operation, args, signing_key):
        self.submitted.append((operation, args, signing_key))
        if self.submit_future is not None:
            return self.submit_future
        future: Future = Future()
        future.set_result(self.receipt)
        return future

    def read(self, operation, address):
        if self.read_future is not None:
            return self.read_future
        future: Future = Future()
        future.set_result(self.read_result)
        return future

    def extract_events(self, receipt, event_kind):
        return list(self.events)

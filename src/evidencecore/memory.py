"""In-memory ledger implementing the evidence contract rules.

Useful for tests and local development: records live in a dict, every
submission produces a receipt with the same events the on-chain
contracts emit, including their embedded result codes.
"""

from __future__ import annotations

import hashlib
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future
from dataclasses import dataclass, field
from typing import Any

from evidencecore.codec import normalize_address
from evidencecore.identity import IdentityResolver, WeIdResolver
from evidencecore.ledger import (
    EVENT_ADD_HASH,
    EVENT_ADD_SIGNATURE,
    EVENT_CREATE_EVIDENCE,
    OP_ADD_SIGNATURE,
    OP_CREATE_EVIDENCE,
    OP_GET_INFO,
    OP_SET_HASH,
    LedgerClient,
)
from evidencecore.models import Receipt
from evidencecore.results import EventCode

_EMPTY_SLOT = b"\x00" * 32


@dataclass
class StoredEvidence:
    """Contract storage of one evidence record."""

    hashes: list[bytes]
    signers: list[str]
    rs: list[bytes]
    ss: list[bytes]
    vs: list[int]
    extra: list[bytes] = field(default_factory=list)

    def sign(self, account: str, r: bytes, s: bytes, v: int, every_slot: bool = False) -> bool:
        """Store a signature in the slots owned by account.

        Only the first owned slot is filled unless every_slot is set.
        """
        signed = False
        for index, signer in enumerate(self.signers):
            if signer == account:
                self.rs[index] = r
                self.ss[index] = s
                self.vs[index] = v
                signed = True
                if not every_slot:
                    break
        return signed


class InMemoryLedger(LedgerClient):
    """Ledger client backed by process memory."""

    def __init__(
        self,
        resolver: IdentityResolver | None = None,
        executor: Executor | None = None,
    ) -> None:
        """Initialize ledger.

        Args:
            resolver: Used to derive the sender account of a signing key
            executor: If given, operations run on it instead of completing
                synchronously
        """
        self.resolver = resolver or WeIdResolver()
        self.executor = executor
        self.records: dict[str, StoredEvidence] = {}
        self._lock = threading.Lock()
        self._block_number = 0

    def submit(self, operation: str, args: dict[str, Any], signing_key: Any) -> Future[Receipt]:
        handlers: dict[str, Callable[[dict[str, Any], str], dict[str, Any]]] = {
            OP_CREATE_EVIDENCE: self._create_evidence,
            OP_ADD_SIGNATURE: self._add_signature,
            OP_SET_HASH: self._set_hash,
        }
        if operation not in handlers:
            raise ValueError(f"Unknown operation: {operation}")
        sender = self.resolver.address_of_key(signing_key)
        handler = handlers[operation]
        return self._run(lambda: self._transact(operation, handler, args, sender))

    def read(self, operation: str, address: str) -> Future[list[Any] | None]:
        if operation != OP_GET_INFO:
            raise ValueError(f"Unknown read operation: {operation}")
        return self._run(lambda: self._get_info(address))

    def extract_events(self, receipt: Receipt, event_kind: str) -> list[dict[str, Any]]:
        return [
            {k: v for k, v in log.items() if k != "event"}
            for log in receipt.logs
            if log.get("event") == event_kind
        ]

    def _run(self, fn: Callable[[], Any]) -> Future:
        if self.executor is not None:
            return self.executor.submit(fn)
        future: Future = Future()
        try:
            future.set_result(fn())
        except Exception as e:
            future.set_exception(e)
        return future

    def _transact(
        self,
        operation: str,
        handler: Callable[[dict[str, Any], str], dict[str, Any]],
        args: dict[str, Any],
        sender: str,
    ) -> Receipt:
        with self._lock:
            self._block_number += 1
            event = handler(args, sender)
            tx_hash = hashlib.sha256(
                f"{operation}:{self._block_number}:{sender}".encode("utf-8")
            ).hexdigest()
            return Receipt(
                transaction_hash="0x" + tx_hash,
                block_number=self._block_number,
                logs=[event],
            )

    def _create_evidence(self, args: dict[str, Any], sender: str) -> dict[str, Any]:
        signers = [normalize_address(a) for a in args["signers"]]
        hashes = list(args["hashes"])
        if not signers or not hashes:
            return {"event": EVENT_CREATE_EVIDENCE, "retCode": EventCode.ILLEGAL_INPUT.value, "addr": None}

        address = normalize_address(
            hashlib.sha256(f"evidence:{self._block_number}".encode("utf-8")).digest()[:20]
        )
        record = StoredEvidence(
            hashes=hashes,
            signers=signers,
            rs=[_EMPTY_SLOT] * len(signers),
            ss=[_EMPTY_SLOT] * len(signers),
            vs=[0] * len(signers),
            extra=list(args.get("extra", [])),
        )
        record.sign(sender, args["r"], args["s"], args["v"])
        self.records[address] = record
        return {"event": EVENT_CREATE_EVIDENCE, "retCode": EventCode.SUCCESS.value, "addr": address}

    def _add_signature(self, args: dict[str, Any], sender: str) -> dict[str, Any]:
        record = self.records.get(normalize_address(args["address"]))
        event = {
            "event": EVENT_ADD_SIGNATURE,
            "retCode": EventCode.ILLEGAL_INPUT.value,
            "r": args["r"],
            "s": args["s"],
            "v": args["v"],
        }
        if record is not None and args["v"] != 0 and record.sign(
            sender, args["r"], args["s"], args["v"], every_slot=True
        ):
            event["retCode"] = EventCode.SUCCESS.value
        return event

    def _set_hash(self, args: dict[str, Any], sender: str) -> dict[str, Any]:
        record = self.records.get(normalize_address(args["address"]))
        event = {"event": EVENT_ADD_HASH, "retCode": EventCode.ILLEGAL_INPUT.value, "hash": args["hashes"]}
        if record is not None and sender in record.signers and args["hashes"]:
            record.hashes = list(args["hashes"])
            event["retCode"] = EventCode.SUCCESS.value
        return event

    def _get_info(self, address: str) -> list[Any] | None:
        with self._lock:
            record = self.records.get(normalize_address(address))
            if record is None:
                return None
            return [
                list(record.hashes),
                list(record.signers),
                list(record.rs),
                list(record.ss),
                list(record.vs),
            ]

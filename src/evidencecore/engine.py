"""Evidence Lifecycle Engine.

Creates evidence records, appends signatures, replaces their hash and
reads back their full signed state. Every write is submitted once and
awaited with a single bounded wait; a timeout only abandons the local
wait, the transaction may still land on the ledger.

None of the public operations raise: outcomes are reported through
ResponseData and its ErrorCode.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from concurrent.futures import Future
from typing import Any

from evidencecore.codec import join_hash_slots, strings_to_slots
from evidencecore.config import EngineConfig, SignatureAlignment
from evidencecore.errors import CodecError, EvidenceError
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
from evidencecore.models import (
    EvidenceInfo,
    EvidenceSignInfo,
    Receipt,
    ResponseData,
    TransactionInfo,
)
from evidencecore.results import ErrorCode, interpret_create_event, interpret_update_event
from evidencecore.signatures import SignatureComponents

logger = logging.getLogger(__name__)

# Lists returned by getInfo: hashes, signers, r, s, v
_INFO_FIELDS = 5


class EvidenceEngine:
    """Orchestrates evidence operations against an injected ledger client."""

    def __init__(
        self,
        ledger: LedgerClient,
        resolver: IdentityResolver | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            ledger: Capability used to submit, read and decode events
            resolver: Identity translation (default: WeIdResolver)
            config: Engine configuration (default: EngineConfig())
        """
        self.ledger = ledger
        self.config = config or EngineConfig()
        self.resolver = resolver or WeIdResolver(self.config.did_method)

    def create_evidence(
        self,
        signature: SignatureComponents,
        hash_fragments: Sequence[str],
        extra_values: Sequence[str],
        signing_key: Any,
        signers: Sequence[str] | None = None,
        *,
        timeout: float | None = None,
    ) -> ResponseData[str]:
        """Create an evidence record.

        Args:
            signature: Creator's signature over the evidence content
            hash_fragments: Hash fragments, one slot each
            extra_values: Extra opaque values, one slot each
            signing_key: Private key submitting the transaction
            signers: Declared signer identities; defaults to the key's own
                identity. Duplicates are kept.
            timeout: Seconds to wait for the receipt

        Returns:
            ResponseData with the new record address ("" on failure)
        """
        try:
            if signers:
                signer_addresses = [self.resolver.to_address(s) for s in signers]
            else:
                signer_addresses = [self.resolver.address_of_key(signing_key)]

            args: dict[str, Any] = {
                "hashes": strings_to_slots(hash_fragments),
                "signers": signer_addresses,
                "r": signature.r,
                "s": signature.s,
                "v": signature.v,
                "extra": strings_to_slots(extra_values),
            }
            if self.config.evidence_factory_address:
                args["address"] = self.config.evidence_factory_address

            receipt = self._submit(OP_CREATE_EVIDENCE, args, signing_key, timeout)
        except TimeoutError:
            logger.error("create evidence failed due to system timeout", exc_info=True)
            return ResponseData("", ErrorCode.TRANSACTION_TIMEOUT)
        except Exception:
            logger.exception("create evidence failed due to transaction error")
            return ResponseData("", ErrorCode.TRANSACTION_EXECUTE_ERROR)

        info = TransactionInfo.from_receipt(receipt)
        event = self._first_event(receipt, EVENT_CREATE_EVIDENCE)
        if event is None:
            logger.error("create evidence failed due to transaction event decoding failure")
            return ResponseData("", ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR, info)

        address = event.get("addr")
        error_code = interpret_create_event(event["retCode"], address)
        if error_code is not ErrorCode.SUCCESS:
            logger.warning(
                f"create evidence rejected: {error_code.message} "
                f"(tx {receipt.transaction_hash})"
            )
            return ResponseData("", error_code, info)
        return ResponseData(str(address), ErrorCode.SUCCESS, info)

    def add_signature(
        self,
        signature: SignatureComponents,
        signing_key: Any,
        address: str,
        *,
        timeout: float | None = None,
    ) -> ResponseData[bool]:
        """Append a signature to an existing evidence record."""
        args = {"address": address, "r": signature.r, "s": signature.s, "v": signature.v}
        return self._update(OP_ADD_SIGNATURE, EVENT_ADD_SIGNATURE, args, signing_key, timeout)

    def set_hash_value(
        self,
        hash_fragments: Sequence[str],
        signing_key: Any,
        address: str,
        *,
        timeout: float | None = None,
    ) -> ResponseData[bool]:
        """Replace the hash of an existing evidence record.

        No signature is attached; callers wanting a signed update call
        add_signature separately.
        """
        try:
            args = {"address": address, "hashes": strings_to_slots(hash_fragments)}
        except CodecError:
            logger.exception("set hash value failed due to invalid hash fragments")
            return ResponseData(False, ErrorCode.TRANSACTION_EXECUTE_ERROR)
        return self._update(OP_SET_HASH, EVENT_ADD_HASH, args, signing_key, timeout)

    def get_info(self, address: str, *, timeout: float | None = None) -> ResponseData[EvidenceInfo | None]:
        """Read the full signed state of an evidence record.

        Read-only: nothing is submitted and no transaction info is returned.
        """
        try:
            future = self.ledger.read(OP_GET_INFO, address)
            raw = future.result(timeout=self._timeout(timeout))
        except TimeoutError:
            logger.error("get evidence failed due to system timeout", exc_info=True)
            return ResponseData(None, ErrorCode.TRANSACTION_TIMEOUT)
        except Exception:
            logger.exception("get evidence failed due to transaction error")
            return ResponseData(None, ErrorCode.TRANSACTION_EXECUTE_ERROR)

        if raw is None:
            logger.error(f"get evidence returned no data for {address}")
            return ResponseData(None, ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR)

        try:
            evidence = self._decode_info(raw)
        except (EvidenceError, TypeError, ValueError):
            logger.exception(f"get evidence failed to decode data for {address}")
            return ResponseData(None, ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR)
        return ResponseData(evidence, ErrorCode.SUCCESS)

    def _timeout(self, timeout: float | None) -> float:
        return self.config.receipt_timeout if timeout is None else timeout

    def _submit(
        self,
        operation: str,
        args: dict[str, Any],
        signing_key: Any,
        timeout: float | None,
    ) -> Receipt:
        logger.debug(f"submitting {operation}")
        future: Future[Receipt] = self.ledger.submit(operation, args, signing_key)
        return future.result(timeout=self._timeout(timeout))

    def _update(
        self,
        operation: str,
        event_kind: str,
        args: dict[str, Any],
        signing_key: Any,
        timeout: float | None,
    ) -> ResponseData[bool]:
        """Submit a mutation of an existing record and classify its event."""
        try:
            receipt = self._submit(operation, args, signing_key, timeout)
        except TimeoutError:
            logger.error(f"{operation} failed due to system timeout", exc_info=True)
            return ResponseData(False, ErrorCode.TRANSACTION_TIMEOUT)
        except Exception:
            logger.exception(f"{operation} failed due to transaction error")
            return ResponseData(False, ErrorCode.TRANSACTION_EXECUTE_ERROR)

        info = TransactionInfo.from_receipt(receipt)
        event = self._first_event(receipt, event_kind)
        if event is None:
            logger.error(f"{operation} failed due to transaction event decoding failure")
            return ResponseData(False, ErrorCode.CREDENTIAL_EVIDENCE_BASE_ERROR, info)

        error_code = interpret_update_event(event["retCode"])
        if error_code is not ErrorCode.SUCCESS:
            logger.warning(
                f"{operation} rejected on {args['address']}: {error_code.message} "
                f"(tx {receipt.transaction_hash})"
            )
            return ResponseData(False, error_code, info)
        return ResponseData(True, ErrorCode.SUCCESS, info)

    def _first_event(self, receipt: Receipt, event_kind: str) -> dict[str, Any] | None:
        """Return the single expected event, or None if it cannot be decoded."""
        try:
            events = self.ledger.extract_events(receipt, event_kind)
        except Exception:
            logger.exception(f"could not decode {event_kind} events")
            return None

        if not events:
            return None
        if len(events) > 1:
            logger.warning(f"expected one {event_kind} event, got {len(events)}; using the first")

        event = events[0]
        if not isinstance(event, dict) or not isinstance(event.get("retCode"), int):
            return None
        return event

    def _decode_info(self, raw: Sequence[Any]) -> EvidenceInfo:
        """Rebuild EvidenceInfo from the parallel lists of a getInfo read."""
        if len(raw) < _INFO_FIELDS:
            raise CodecError(f"getInfo returned {len(raw)} fields, expected {_INFO_FIELDS}")
        hashes, signer_addresses, rs, ss, vs = (list(field) for field in raw[:_INFO_FIELDS])

        if not len(signer_addresses) == len(rs) == len(ss) == len(vs):
            raise CodecError(
                f"getInfo lists differ in length: signers={len(signer_addresses)} "
                f"r={len(rs)} s={len(ss)} v={len(vs)}"
            )

        evidence = EvidenceInfo(credential_hash=join_hash_slots(hashes))
        evidence.signers = [self.resolver.to_identity(addr) for addr in signer_addresses]

        # (slot index, token) for every signed slot
        signed: list[tuple[int, str]] = []
        for index, (r, s, v) in enumerate(zip(rs, ss, vs)):
            if int(v) == 0:
                continue
            signed.append((index, SignatureComponents(v=int(v), r=r, s=s).serialize()))

        if self.config.signature_alignment is SignatureAlignment.POSITIONAL:
            pairs = zip(evidence.signers, (token for _, token in signed))
        else:
            pairs = ((evidence.signers[index], token) for index, token in signed)

        for signer, token in pairs:
            evidence.sign_info[signer] = EvidenceSignInfo(signature=token)
        return evidence

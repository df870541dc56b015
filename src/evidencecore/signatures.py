"""ECDSA signature components and their transport token.

Canonical layout (65 bytes): v (1) + r (32) + s (32), base64 encoded for
display and storage.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from typing import Any

from evidencecore.codec import SLOT_SIZE, int_to_uint8, to_bytes32
from evidencecore.errors import CodecError, SignatureFormatError

SIGNATURE_SIZE = 1 + 2 * SLOT_SIZE


@dataclass(frozen=True)
class SignatureComponents:
    """The (v, r, s) triple of an ECDSA signature.

    A triple with v == 0 marks an unsigned slot on the ledger.
    """

    v: int
    r: bytes
    s: bytes

    def __post_init__(self) -> None:
        try:
            int_to_uint8(self.v)
            object.__setattr__(self, "r", to_bytes32(self.r))
            object.__setattr__(self, "s", to_bytes32(self.s))
        except CodecError as e:
            raise SignatureFormatError(f"Invalid signature components: {e}") from e

    @property
    def is_empty(self) -> bool:
        """Whether this is the placeholder of an unsigned slot."""
        return self.v == 0

    def to_bytes(self) -> bytes:
        """Pack into the canonical 65-byte layout."""
        return bytes([self.v]) + self.r + self.s

    @classmethod
    def from_bytes(cls, data: bytes) -> SignatureComponents:
        """Unpack from the canonical 65-byte layout."""
        if len(data) != SIGNATURE_SIZE:
            raise SignatureFormatError(
                f"Signature must be {SIGNATURE_SIZE} bytes, got {len(data)}"
            )
        return cls(v=data[0], r=data[1:33], s=data[33:65])

    def serialize(self) -> str:
        """Encode as a base64 token."""
        return base64.b64encode(self.to_bytes()).decode("ascii")

    @classmethod
    def deserialize(cls, token: str) -> SignatureComponents:
        """Decode a base64 token produced by serialize()."""
        try:
            data = base64.b64decode(token, validate=True)
        except (binascii.Error, ValueError) as e:
            raise SignatureFormatError(f"Invalid base64 signature token: {e}") from e
        return cls.from_bytes(data)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with hex r/s."""
        return {
            "v": self.v,
            "r": "0x" + self.r.hex(),
            "s": "0x" + self.s.hex(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SignatureComponents:
        """Create from dictionary."""
        return cls(v=int(data["v"]), r=data["r"], s=data["s"])

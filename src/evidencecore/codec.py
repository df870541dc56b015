"""Binary codec between application values and ledger-native slots.

Ledger-native encodings used by the evidence contracts:
- bytes32: fixed 32-byte slot, text right padded with NUL
- uint8: single unsigned byte (signature recovery id)
- address: 20-byte account, rendered as lowercase 0x hex
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence

from evidencecore.errors import CodecError

SLOT_SIZE = 32
ADDRESS_SIZE = 20
HEX_PREFIX = "0x"

ZERO_ADDRESS = HEX_PREFIX + "00" * ADDRESS_SIZE

_HEX_RE = re.compile(r"^[0-9a-fA-F]*$")


def strip_hex_prefix(value: str) -> str:
    """Remove a leading 0x/0X if present."""
    if value[:2].lower() == HEX_PREFIX:
        return value[2:]
    return value


def string_to_slot(value: str) -> bytes:
    """Encode a string into a 32-byte slot.

    The UTF-8 bytes are right padded with NUL. Values longer than a slot
    are rejected rather than cut, so a stored fragment is always complete.
    """
    if not isinstance(value, str):
        raise CodecError(f"Slot value must be str, got {type(value).__name__}")
    raw = value.encode("utf-8")
    if len(raw) > SLOT_SIZE:
        raise CodecError(f"Slot value exceeds {SLOT_SIZE} bytes: {len(raw)} bytes")
    return raw.ljust(SLOT_SIZE, b"\x00")


def strings_to_slots(values: Iterable[str]) -> list[bytes]:
    """Encode strings into slots, preserving order and duplicates."""
    return [string_to_slot(value) for value in values]


def slot_to_string(slot: bytes) -> str:
    """Decode a 32-byte slot back into its string form.

    Only the trailing NUL padding is removed.
    """
    if len(slot) != SLOT_SIZE:
        raise CodecError(f"Slot must be {SLOT_SIZE} bytes, got {len(slot)}")
    try:
        return bytes(slot).rstrip(b"\x00").decode("utf-8")
    except UnicodeDecodeError as e:
        raise CodecError(f"Slot is not valid UTF-8 text: {e}") from e


def int_to_uint8(value: int) -> int:
    """Validate an integer as a uint8."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise CodecError(f"uint8 must be int, got {type(value).__name__}")
    if not 0 <= value <= 0xFF:
        raise CodecError(f"uint8 out of range: {value}")
    return value


def to_bytes32(value: bytes | str) -> bytes:
    """Coerce 32 raw bytes or a 64-digit hex string into a 32-byte value."""
    if isinstance(value, (bytes, bytearray)):
        raw = bytes(value)
    elif isinstance(value, str):
        digits = strip_hex_prefix(value)
        if not _HEX_RE.match(digits) or len(digits) % 2:
            raise CodecError(f"Invalid hex value: {value!r}")
        raw = bytes.fromhex(digits)
    else:
        raise CodecError(f"bytes32 must be bytes or hex str, got {type(value).__name__}")

    if len(raw) != SLOT_SIZE:
        raise CodecError(f"bytes32 must be {SLOT_SIZE} bytes, got {len(raw)}")
    return raw


def normalize_address(address: str | bytes) -> str:
    """Render a 20-byte account address as lowercase 0x hex."""
    if isinstance(address, (bytes, bytearray)):
        raw = bytes(address)
    else:
        digits = strip_hex_prefix(address)
        if not _HEX_RE.match(digits) or len(digits) % 2:
            raise CodecError(f"Invalid address: {address!r}")
        raw = bytes.fromhex(digits)

    if len(raw) != ADDRESS_SIZE:
        raise CodecError(f"Address must be {ADDRESS_SIZE} bytes, got {len(raw)}")
    return HEX_PREFIX + raw.hex()


def is_empty_address(address: str | None) -> bool:
    """Check for a missing or all-zero address."""
    if not address:
        return True
    digits = strip_hex_prefix(address)
    return not digits or set(digits) == {"0"}


def split_hash(hash_value: str) -> list[str]:
    """Split a 32-byte hex hash into the two fragments stored on the ledger.

    Each fragment is 32 hex characters, which fits a single slot as text.
    """
    digits = strip_hex_prefix(hash_value)
    if len(digits) != 2 * SLOT_SIZE or not _HEX_RE.match(digits):
        raise CodecError(f"Hash must be {2 * SLOT_SIZE} hex characters, got {hash_value!r}")
    return [digits[:SLOT_SIZE], digits[SLOT_SIZE:]]


def join_hash_slots(slots: Sequence[bytes]) -> str:
    """Reassemble a credential hash from ledger hash slots.

    Only the first two slots take part. With fewer than two slots the
    bare prefix is returned as the empty sentinel.
    """
    if len(slots) < 2:
        return HEX_PREFIX
    return HEX_PREFIX + slot_to_string(slots[0]) + slot_to_string(slots[1])

"""Translation between signer identities, ledger accounts and keys.

A signer identity is a decentralized identifier of the form
``did:<method>:<0x account address>``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from Crypto.Hash import keccak
from cryptography.hazmat.primitives.asymmetric import ec

from evidencecore.codec import normalize_address, strip_hex_prefix
from evidencecore.errors import CodecError

# secp256k1 group order
_CURVE_ORDER = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


class IdentityResolver(ABC):
    """Maps signer identities to ledger accounts and back."""

    @abstractmethod
    def to_address(self, identity: str) -> str:
        """Translate a signer identity into its ledger account address."""
        pass

    @abstractmethod
    def to_identity(self, address: str) -> str:
        """Translate a ledger account address into a signer identity."""
        pass

    @abstractmethod
    def address_of_key(self, signing_key: Any) -> str:
        """Account address controlled by a private key."""
        pass


def parse_private_key(signing_key: Any) -> int:
    """Parse a secp256k1 private key.

    Accepts an int, a decimal string, a 0x-prefixed hex string or 32 raw
    bytes.
    """
    if isinstance(signing_key, bool):
        raise CodecError("Private key must not be a bool")
    if isinstance(signing_key, int):
        value = signing_key
    elif isinstance(signing_key, (bytes, bytearray)):
        if len(signing_key) != 32:
            raise CodecError(f"Private key must be 32 bytes, got {len(signing_key)}")
        value = int.from_bytes(signing_key, "big")
    elif isinstance(signing_key, str):
        text = signing_key.strip()
        try:
            if text[:2].lower() == "0x":
                value = int(strip_hex_prefix(text), 16)
            else:
                value = int(text, 10)
        except ValueError:
            raise CodecError("Private key is neither decimal nor 0x hex")
    else:
        raise CodecError(f"Unsupported private key type: {type(signing_key).__name__}")

    if not 0 < value < _CURVE_ORDER:
        raise CodecError("Private key out of range for secp256k1")
    return value


def address_from_private_key(signing_key: Any) -> str:
    """Derive the account address of a secp256k1 private key.

    The address is the last 20 bytes of the Keccak-256 digest of the
    uncompressed public key (without its 0x04 marker).
    """
    private_key = ec.derive_private_key(parse_private_key(signing_key), ec.SECP256K1())
    numbers = private_key.public_key().public_numbers()
    public_bytes = numbers.x.to_bytes(32, "big") + numbers.y.to_bytes(32, "big")
    digest = keccak.new(digest_bits=256, data=public_bytes).digest()
    return normalize_address(digest[-20:])


class WeIdResolver(IdentityResolver):
    """Resolver for ``did:weid:<address>`` identities."""

    def __init__(self, method: str = "weid"):
        self.method = method
        self._prefix = f"did:{method}:"

    def to_address(self, identity: str) -> str:
        if not identity.startswith(self._prefix):
            raise CodecError(f"Not a did:{self.method} identity: {identity!r}")
        return normalize_address(identity[len(self._prefix):])

    def to_identity(self, address: str) -> str:
        return self._prefix + normalize_address(address)

    def address_of_key(self, signing_key: Any) -> str:
        return address_from_private_key(signing_key)

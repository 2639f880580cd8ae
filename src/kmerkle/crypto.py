from __future__ import annotations
import base64
import binascii
import re

import rfc8785
from Crypto.Hash import keccak

DIGEST_SIZE = 32
_HEX_DIGEST = re.compile(r"[0-9a-f]{64}")


def B64(b: bytes) -> str:
    """Base64-encode bytes to ASCII string."""
    return base64.b64encode(b).decode("ascii")


def B64D(s: str) -> bytes:
    """Decode base64 ASCII string to bytes with strict validation."""
    try:
        return base64.b64decode(s.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise ValueError("invalid base64") from e


def keccak256(data: bytes) -> bytes:
    """Keccak-256 with the original Keccak padding (Ethereum style).

    This is not NIST SHA3-256; the two differ only in the padding byte but
    produce unrelated digests.
    """
    return keccak.new(digest_bits=256, data=data).digest()


def to_hex(digest: bytes) -> str:
    return digest.hex()


def from_hex(s: str) -> bytes:
    """Parse a lowercase 64-char hex digest."""
    if not isinstance(s, str) or not _HEX_DIGEST.fullmatch(s):
        raise ValueError("digest must be 64 lowercase hex characters")
    return bytes.fromhex(s)


def jcs_dumps(obj) -> bytes:
    """Deterministic canonical JSON bytes per RFC8785."""
    return rfc8785.dumps(obj)

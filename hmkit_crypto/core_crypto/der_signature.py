"""
ECDSA Signature Encoding

Converts between the 64-byte fixed-width (r || s) signature carried on the
wire and the ASN.1 DER form expected by signature APIs:

    SEQUENCE {
        INTEGER r,
        INTEGER s
    }

    30 L 02 Lr <r> 02 Ls <s>      where L = 4 + Lr + Ls

Only this one shape is produced or accepted. The decoder reads the length
bytes at fixed offsets but checks every one against the buffer before
slicing.
"""

import logging
from typing import Tuple

from ..exceptions import InvalidSignatureEncoding
from .byte_utils import fixed_width, sign_guard


logger = logging.getLogger(__name__)


# Constants
SIGNATURE_SIZE = 64     # r (32) || s (32)
COMPONENT_SIZE = 32     # P-256 scalar
SEQUENCE_TAG = 0x30
INTEGER_TAG = 0x02
MAX_SHORT_LENGTH = 0x7F  # DER short-form length limit
MAX_INTEGER_SIZE = COMPONENT_SIZE + 1  # One sign-guard byte allowed


def encode_signature(signature: bytes) -> bytes:
    """
    Encode a fixed-width signature as minimal DER.

    r and s are each stripped of leading zeros and given a 0x00 sign guard
    when their high bit is set.

    Args:
        signature: 64-byte r || s

    Returns:
        DER-encoded SEQUENCE of two INTEGERs (8 to 72 bytes)

    Raises:
        InvalidSignatureEncoding: If signature is not 64 bytes
    """
    if len(signature) != SIGNATURE_SIZE:
        logger.warning(f"Rejecting fixed-width signature of {len(signature)} bytes")
        raise InvalidSignatureEncoding(
            f"Signature must be {SIGNATURE_SIZE} bytes, got {len(signature)}"
        )

    r = sign_guard(signature[:COMPONENT_SIZE])
    s = sign_guard(signature[COMPONENT_SIZE:])
    body_length = 4 + len(r) + len(s)

    der = bytearray(2 + body_length)
    der[0] = SEQUENCE_TAG
    der[1] = body_length
    der[2] = INTEGER_TAG
    der[3] = len(r)
    der[4:4 + len(r)] = r
    offset = 4 + len(r)
    der[offset] = INTEGER_TAG
    der[offset + 1] = len(s)
    der[offset + 2:] = s

    return bytes(der)


def _read_integer(der: bytes, offset: int) -> Tuple[bytes, int]:
    """
    Read one INTEGER TLV starting at ``offset``.

    Returns:
        Tuple of (integer contents, offset after the TLV)
    """
    if offset + 2 > len(der):
        raise InvalidSignatureEncoding("Truncated INTEGER header")
    if der[offset] != INTEGER_TAG:
        raise InvalidSignatureEncoding(
            f"Expected INTEGER tag 0x02 at offset {offset}, got 0x{der[offset]:02x}"
        )

    length = der[offset + 1]
    if length == 0 or length > MAX_INTEGER_SIZE:
        raise InvalidSignatureEncoding(f"Invalid INTEGER length {length}")

    start = offset + 2
    end = start + length
    if end > len(der):
        raise InvalidSignatureEncoding(
            f"INTEGER length {length} exceeds buffer ({len(der) - start} bytes left)"
        )

    value = der[start:end]
    if length == MAX_INTEGER_SIZE and value[0] != 0:
        raise InvalidSignatureEncoding("INTEGER larger than 256 bits")

    return value, end


def decode_signature(der: bytes) -> bytes:
    """
    Decode a DER ECDSA signature into 64-byte fixed-width form.

    Args:
        der: DER-encoded SEQUENCE { INTEGER r, INTEGER s }

    Returns:
        64-byte r || s, each component left-padded to 32 bytes

    Raises:
        InvalidSignatureEncoding: If the buffer is not exactly that shape
    """
    if len(der) < 2 or der[0] != SEQUENCE_TAG:
        raise InvalidSignatureEncoding("Expected DER SEQUENCE")

    body_length = der[1]
    if body_length > MAX_SHORT_LENGTH:
        raise InvalidSignatureEncoding("Long-form SEQUENCE length not supported")
    if body_length != len(der) - 2:
        raise InvalidSignatureEncoding(
            f"SEQUENCE length {body_length} does not match buffer ({len(der) - 2} bytes)"
        )

    r, offset = _read_integer(der, 2)
    s, offset = _read_integer(der, offset)

    if offset != len(der):
        raise InvalidSignatureEncoding(f"{len(der) - offset} trailing bytes after INTEGERs")

    signature = bytearray(SIGNATURE_SIZE)
    signature[:COMPONENT_SIZE] = fixed_width(r, COMPONENT_SIZE)
    signature[COMPONENT_SIZE:] = fixed_width(s, COMPONENT_SIZE)
    return bytes(signature)


# Self-test when run directly
if __name__ == "__main__":
    print("DER Signature Codec Test")
    print("=" * 50)

    r = b"\x00\x89" + bytes(range(30))
    s = b"\x12" * 32
    encoded = encode_signature(r + s)
    print(f"  DER: {encoded.hex()}")

    test1 = encoded[3] == 32 and encoded[4] == 0x00 and encoded[5] == 0x89
    print(f"  Sign guard kept:   {'✓ PASS' if test1 else '✗ FAIL'}")

    test2 = decode_signature(encoded) == r + s
    print(f"  Round trip:        {'✓ PASS' if test2 else '✗ FAIL'}")

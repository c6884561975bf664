"""
Byte Normalization Helpers

Fixed-width padding and trimming used by the signature and key encoders:
- fixed_width: right-aligned pad/truncate of big-endian integers
- strip_leading_zeros / sign_guard: minimal DER INTEGER contents
- pad64: protocol padding to a 64-byte boundary before HMAC and signing
- xor_bytes: byte-wise XOR for the keystream cipher

All functions are pure and never mutate their input.
"""

# ============================================================================
# Constants
# ============================================================================

PADDING_BLOCK_SIZE = 64  # Protocol padding, independent of SHA-256 blocks
SIGN_BIT = 0x80


# ============================================================================
# Fixed-Width Integers
# ============================================================================

def fixed_width(data: bytes, width: int) -> bytes:
    """
    Normalize a big-endian integer to exactly ``width`` bytes.

    - Same length: returned unchanged
    - Longer: the low ``width`` bytes are kept (drops a DER sign byte or
      an oversized backend output)
    - Shorter: left-padded with zero bytes

    Args:
        data: Big-endian integer bytes
        width: Target length

    Returns:
        Exactly ``width`` bytes
    """
    length = len(data)
    if length == width:
        return bytes(data)
    if length > width:
        return bytes(data[length - width:])

    out = bytearray(width)
    out[width - length:] = data
    return bytes(out)


def strip_leading_zeros(data: bytes) -> bytes:
    """
    Drop zero bytes from the front of ``data``.

    An all-zero input reduces to ``b""``.
    """
    index = 0
    while index < len(data) and data[index] == 0:
        index += 1
    return bytes(data[index:])


def sign_guard(data: bytes) -> bytes:
    """
    Produce minimal two's-complement contents for a non-negative DER INTEGER.

    Leading zeros are stripped, then a single 0x00 is prepended when the
    high bit of the first remaining byte is set, so the value is not read
    as negative. Zero encodes as a single 0x00 byte.

    Args:
        data: Unsigned big-endian integer bytes

    Returns:
        DER INTEGER contents (1 to len(data) + 1 bytes)
    """
    stripped = strip_leading_zeros(data)
    if not stripped:
        return b"\x00"
    if stripped[0] & SIGN_BIT:
        return b"\x00" + stripped
    return stripped


# ============================================================================
# Message Padding
# ============================================================================

def pad64(message: bytes) -> bytes:
    """
    Zero-pad ``message`` up to the next multiple of 64 bytes.

    Messages already on a 64-byte boundary (including the empty message)
    are returned unchanged, so pad64(pad64(m)) == pad64(m).

    Args:
        message: Arbitrary bytes

    Returns:
        Padded message with len % 64 == 0
    """
    remainder = len(message) % PADDING_BLOCK_SIZE
    if remainder == 0:
        return bytes(message)
    return bytes(message) + bytes(PADDING_BLOCK_SIZE - remainder)


# Name used by the wire protocol documentation
fill_64_blocks = pad64


def xor_bytes(a: bytes, b: bytes) -> bytes:
    """XOR two equal-length byte strings."""
    if len(a) != len(b):
        raise ValueError(f"Length mismatch: {len(a)} != {len(b)}")
    return bytes(x ^ y for x, y in zip(a, b))


# Self-test when run directly
if __name__ == "__main__":
    print("Byte Utils Test")
    print("=" * 50)

    test1 = fixed_width(b"\x01\x02", 4) == b"\x00\x00\x01\x02"
    print(f"  fixed_width pad:      {'✓ PASS' if test1 else '✗ FAIL'}")

    test2 = fixed_width(b"\x00" + b"\xff" * 32, 32) == b"\xff" * 32
    print(f"  fixed_width truncate: {'✓ PASS' if test2 else '✗ FAIL'}")

    test3 = sign_guard(b"\x00\x89\xab") == b"\x00\x89\xab"
    test3 = test3 and sign_guard(b"\x00\x00\x12") == b"\x12"
    print(f"  sign_guard:           {'✓ PASS' if test3 else '✗ FAIL'}")

    padded = pad64(b"abc")
    test4 = len(padded) == 64 and pad64(padded) == padded
    print(f"  pad64:                {'✓ PASS' if test4 else '✗ FAIL'}")

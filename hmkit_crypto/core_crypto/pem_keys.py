"""
P-256 Key Encoding (PKCS#8 / SubjectPublicKeyInfo)

Wraps raw key material into the minimal DER structures that
``cryptography``'s PEM loaders accept:

Private key (PKCS#8, 138 bytes):
    PKCS8_PRIVATE_KEY_PREFIX | d (32) | PKCS8_PUBLIC_KEY_TAG | 04 x y (65)

Public key (SubjectPublicKeyInfo, 91 bytes):
    SPKI_PUBLIC_KEY_PREFIX | 04 x y (65)

The prefixes embed the id-ecPublicKey and prime256v1 OIDs. They are only
valid for P-256; no other curve is supported.
"""

import base64
import logging

from ..exceptions import InvalidKeyLength


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

PRIVATE_KEY_SIZE = 32
PUBLIC_KEY_SIZE = 64        # x (32) || y (32), no point tag
UNCOMPRESSED_POINT_TAG = 0x04
PEM_LINE_LENGTH = 64

# SEQUENCE { INTEGER 0, SEQUENCE { id-ecPublicKey, prime256v1 },
#            OCTET STRING { SEQUENCE { INTEGER 1, OCTET STRING (32) ...
PKCS8_PRIVATE_KEY_PREFIX = bytes([
    0x30, 0x81, 0x87, 0x02, 0x01, 0x00, 0x30, 0x13,
    0x06, 0x07, 0x2A, 0x86, 0x48, 0xCE, 0x3D, 0x02, 0x01,
    0x06, 0x08, 0x2A, 0x86, 0x48, 0xCE, 0x3D, 0x03, 0x01, 0x07,
    0x04, 0x6D, 0x30, 0x6B, 0x02, 0x01, 0x01, 0x04, 0x20,
])

# [1] { BIT STRING (66, no unused bits)
PKCS8_PUBLIC_KEY_TAG = bytes([0xA1, 0x44, 0x03, 0x42, 0x00])

# SEQUENCE { SEQUENCE { id-ecPublicKey, prime256v1 }, BIT STRING (66)
SPKI_PUBLIC_KEY_PREFIX = bytes([
    0x30, 0x59, 0x30, 0x13,
    0x06, 0x07, 0x2A, 0x86, 0x48, 0xCE, 0x3D, 0x02, 0x01,
    0x06, 0x08, 0x2A, 0x86, 0x48, 0xCE, 0x3D, 0x03, 0x01, 0x07,
    0x03, 0x42, 0x00,
])

PRIVATE_KEY_LABEL = "PRIVATE KEY"
PUBLIC_KEY_LABEL = "PUBLIC KEY"


# ============================================================================
# Point Helpers
# ============================================================================

def check_private_key(private_key: bytes) -> None:
    """Raise InvalidKeyLength unless private_key is 32 bytes."""
    if len(private_key) != PRIVATE_KEY_SIZE:
        logger.warning(f"Rejecting private key of {len(private_key)} bytes")
        raise InvalidKeyLength(
            f"Private key must be {PRIVATE_KEY_SIZE} bytes, got {len(private_key)}"
        )


def check_public_key(public_key: bytes) -> None:
    """Raise InvalidKeyLength unless public_key is 64 bytes."""
    if len(public_key) != PUBLIC_KEY_SIZE:
        logger.warning(f"Rejecting public key of {len(public_key)} bytes")
        raise InvalidKeyLength(
            f"Public key must be {PUBLIC_KEY_SIZE} bytes, got {len(public_key)}"
        )


def uncompressed_point(public_key: bytes) -> bytes:
    """
    Re-add the 0x04 tag to a 64-byte x || y public key.

    Returns:
        65-byte X9.62 uncompressed point
    """
    check_public_key(public_key)
    return bytes([UNCOMPRESSED_POINT_TAG]) + bytes(public_key)


def strip_point_tag(point: bytes) -> bytes:
    """
    Remove the 0x04 tag from an X9.62 uncompressed point.

    Args:
        point: 65-byte uncompressed point

    Returns:
        64-byte x || y
    """
    if len(point) != PUBLIC_KEY_SIZE + 1 or point[0] != UNCOMPRESSED_POINT_TAG:
        raise InvalidKeyLength(
            f"Expected {PUBLIC_KEY_SIZE + 1}-byte uncompressed point, got {len(point)} bytes"
        )
    return bytes(point[1:])


# ============================================================================
# DER Bodies
# ============================================================================

def private_key_to_der(private_key: bytes, public_key: bytes) -> bytes:
    """
    Build a PKCS#8 DER blob for a P-256 key pair.

    Args:
        private_key: 32-byte private scalar
        public_key: 64-byte x || y

    Returns:
        138-byte PKCS#8 PrivateKeyInfo
    """
    check_private_key(private_key)
    point = uncompressed_point(public_key)

    der = bytearray(
        len(PKCS8_PRIVATE_KEY_PREFIX) + PRIVATE_KEY_SIZE +
        len(PKCS8_PUBLIC_KEY_TAG) + len(point)
    )
    offset = 0
    for part in (PKCS8_PRIVATE_KEY_PREFIX, private_key, PKCS8_PUBLIC_KEY_TAG, point):
        der[offset:offset + len(part)] = part
        offset += len(part)

    return bytes(der)


def public_key_to_der(public_key: bytes) -> bytes:
    """
    Build a SubjectPublicKeyInfo DER blob for a P-256 public key.

    Args:
        public_key: 64-byte x || y

    Returns:
        91-byte SubjectPublicKeyInfo
    """
    return SPKI_PUBLIC_KEY_PREFIX + uncompressed_point(public_key)


# ============================================================================
# PEM Framing
# ============================================================================

def to_pem(der: bytes, label: str) -> str:
    """
    Base64-encode ``der`` and frame it as a PEM block.

    Every body line, including the last, is newline-terminated and at
    most 64 characters long.
    """
    body = base64.b64encode(der).decode('ascii')
    lines = [body[i:i + PEM_LINE_LENGTH] for i in range(0, len(body), PEM_LINE_LENGTH)]
    return (
        f"-----BEGIN {label}-----\n" +
        "".join(f"{line}\n" for line in lines) +
        f"-----END {label}-----\n"
    )


def key_pair_to_pem(private_key: bytes, public_key: bytes) -> str:
    """PKCS#8 PEM ("BEGIN PRIVATE KEY") for a raw P-256 key pair."""
    return to_pem(private_key_to_der(private_key, public_key), PRIVATE_KEY_LABEL)


def public_key_to_pem(public_key: bytes) -> str:
    """SubjectPublicKeyInfo PEM ("BEGIN PUBLIC KEY") for a raw P-256 public key."""
    return to_pem(public_key_to_der(public_key), PUBLIC_KEY_LABEL)

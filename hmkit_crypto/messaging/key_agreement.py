"""
Key Generation and Session Key Derivation

Implements:
- P-256 key pair generation (raw 32-byte private, 64-byte public)
- HMAC-SHA256 over 64-byte padded messages
- ECDH shared secret computation
- Per-nonce session keys: HMAC(shared_secret, pad64(nonce))

Both sides of an exchange derive the same session key independently:
    session_key(a_priv, b_pub, nonce) == session_key(b_priv, a_pub, nonce)

Shared secrets and session keys are never logged or cached.
"""

import hashlib
import hmac as _hmac
import logging
import secrets
from dataclasses import dataclass

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.backends import default_backend

from ..exceptions import KeyAgreementError
from ..core_crypto.byte_utils import fixed_width, pad64
from ..core_crypto.pem_keys import (
    PRIVATE_KEY_SIZE,
    check_private_key,
    uncompressed_point,
    strip_point_tag,
)


logger = logging.getLogger(__name__)


# Constants
CURVE = ec.SECP256R1()  # P-256 / prime256v1
SHARED_SECRET_SIZE = 32
SESSION_KEY_SIZE = 32   # HMAC-SHA256 output
NONCE_SIZE = 9          # Protocol nonce length
GROUP_ORDER = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551


@dataclass(frozen=True)
class KeyPair:
    """Raw P-256 key pair as carried by the protocol."""
    private_key: bytes  # 32 bytes
    public_key: bytes   # 64 bytes, x || y

    def __repr__(self) -> str:
        return f"KeyPair(public_key={self.public_key.hex()[:16]}...)"

    def __iter__(self):
        """Allow ``private_key, public_key = generate_keys()``."""
        yield self.private_key
        yield self.public_key


def generate_keys() -> KeyPair:
    """
    Generate a new P-256 key pair.

    The private scalar is normalized to exactly 32 bytes (a scalar with
    leading zero bytes is left-padded), and the public point is returned
    without its 0x04 tag.

    Returns:
        KeyPair with 32-byte private key and 64-byte public key
    """
    private_key = ec.generate_private_key(CURVE, default_backend())

    scalar = private_key.private_numbers().private_value
    scalar_bytes = scalar.to_bytes((scalar.bit_length() + 7) // 8, 'big')

    point = private_key.public_key().public_bytes(
        encoding=serialization.Encoding.X962,
        format=serialization.PublicFormat.UncompressedPoint
    )

    logger.debug("Generated P-256 key pair")
    return KeyPair(fixed_width(scalar_bytes, PRIVATE_KEY_SIZE), strip_point_tag(point))


def hmac(key: bytes, message: bytes) -> bytes:
    """
    HMAC-SHA256 of the 64-byte padded message.

    Args:
        key: HMAC key
        message: Message (zero-padded to a 64-byte boundary first)

    Returns:
        32-byte MAC
    """
    return _hmac.new(key, pad64(message), hashlib.sha256).digest()


def _load_private_key(private_key: bytes) -> ec.EllipticCurvePrivateKey:
    check_private_key(private_key)
    scalar = int.from_bytes(private_key, 'big')
    try:
        if not 0 < scalar < GROUP_ORDER:
            raise ValueError("scalar must be in [1, n - 1]")
        return ec.derive_private_key(scalar, CURVE, default_backend())
    except ValueError as e:
        logger.warning("Private scalar outside the P-256 group order")
        raise KeyAgreementError(f"Invalid private key: {e}") from e


def _load_public_key(public_key: bytes) -> ec.EllipticCurvePublicKey:
    point = uncompressed_point(public_key)
    try:
        return ec.EllipticCurvePublicKey.from_encoded_point(CURVE, point)
    except ValueError as e:
        logger.warning("Peer public key is not a point on P-256")
        raise KeyAgreementError(f"Invalid public key: {e}") from e


def compute_secret(private_key: bytes, public_key: bytes) -> bytes:
    """
    ECDH shared secret between a local private key and a peer public key.

    Args:
        private_key: 32-byte local private scalar
        public_key: 64-byte peer point (x || y)

    Returns:
        32-byte shared secret (x-coordinate of the shared point)

    Raises:
        InvalidKeyLength: If either key has the wrong size
        KeyAgreementError: If the peer point is not on the curve
    """
    local = _load_private_key(private_key)
    peer = _load_public_key(public_key)
    try:
        shared_secret = local.exchange(ec.ECDH(), peer)
    except ValueError as e:
        raise KeyAgreementError(f"ECDH failed: {e}") from e
    return fixed_width(shared_secret, SHARED_SECRET_SIZE)


def session_key(private_key: bytes, public_key: bytes, nonce: bytes) -> bytes:
    """
    Derive the per-exchange session key.

        session_key = HMAC-SHA256(shared_secret, pad64(nonce))

    Only the first 16 bytes are used as the AES key by the keystream
    cipher; the full 32 bytes are returned.

    Args:
        private_key: 32-byte local private key
        public_key: 64-byte peer public key
        nonce: Exchange nonce

    Returns:
        32-byte session key
    """
    return hmac(compute_secret(private_key, public_key), nonce)


def generate_nonce(size: int = NONCE_SIZE) -> bytes:
    """
    Generate a random exchange nonce.

    A nonce must never repeat for the same key pair; the keystream
    cipher's security depends on it.
    """
    return secrets.token_bytes(size)


# Self-test when run directly
if __name__ == "__main__":
    print("Key Agreement Test")
    print("=" * 50)

    alice = generate_keys()
    bob = generate_keys()
    test1 = len(alice.private_key) == 32 and len(alice.public_key) == 64
    print(f"  Key sizes:       {'✓ PASS' if test1 else '✗ FAIL'}")

    test2 = compute_secret(alice.private_key, bob.public_key) == \
        compute_secret(bob.private_key, alice.public_key)
    print(f"  Shared secret:   {'✓ PASS' if test2 else '✗ FAIL'}")

    nonce = generate_nonce()
    test3 = session_key(alice.private_key, bob.public_key, nonce) == \
        session_key(bob.private_key, alice.public_key, nonce)
    print(f"  Session key:     {'✓ PASS' if test3 else '✗ FAIL'}")

"""
Keystream Cipher (encrypt == decrypt)

The protocol's symmetric cipher:

    session_key = HMAC-SHA256(ECDH(priv, pub), pad64(nonce))
    key         = session_key[0:16]
    iv          = nonce[0:7] || nonce[0:9]              (16 bytes)
    block       = AES-128-ECB(key, iv)                  (one block)
    keystream   = block || block || ...  truncated to len(message)
    output      = keystream XOR message

The same 16-byte block repeats across the whole message; it is not a
counter mode. Security rests entirely on never reusing a nonce with the
same key pair: two messages under one nonce leak the XOR of their
plaintexts. The construction is fixed by the wire protocol and must be
kept byte-for-byte.

The upper 16 bytes of the session key are unused.
"""

import logging

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.backends import default_backend

from ..exceptions import InvalidNonceLength, InvalidKeyLength
from ..core_crypto.byte_utils import xor_bytes
from .key_agreement import session_key, SESSION_KEY_SIZE


logger = logging.getLogger(__name__)


# Constants
AES_KEY_SIZE = 16       # AES-128
BLOCK_SIZE = 16
IV_PREFIX_SIZE = 7
MIN_NONCE_SIZE = BLOCK_SIZE - IV_PREFIX_SIZE  # prefix (7) + nonce (9) == one AES block


def build_iv(nonce: bytes) -> bytes:
    """
    Build the 16-byte IV: nonce[0:7] || nonce[0:9].

    Raises:
        InvalidNonceLength: If nonce is shorter than 9 bytes
    """
    if len(nonce) < MIN_NONCE_SIZE:
        logger.warning(f"Rejecting {len(nonce)}-byte nonce")
        raise InvalidNonceLength(
            f"Nonce must be at least {MIN_NONCE_SIZE} bytes, got {len(nonce)}"
        )
    return bytes(nonce[:IV_PREFIX_SIZE]) + bytes(nonce[:MIN_NONCE_SIZE])


def keystream_block(encryption_key: bytes, iv: bytes) -> bytes:
    """
    Encrypt a single IV block with AES-128-ECB.

    Args:
        encryption_key: 16-byte AES key
        iv: 16-byte block

    Returns:
        16-byte keystream block
    """
    if len(encryption_key) != AES_KEY_SIZE:
        raise InvalidKeyLength(
            f"AES-128 requires {AES_KEY_SIZE}-byte key, got {len(encryption_key)} bytes"
        )

    cipher = Cipher(
        algorithms.AES(encryption_key),
        modes.ECB(),
        backend=default_backend()
    )
    encryptor = cipher.encryptor()
    return encryptor.update(iv) + encryptor.finalize()


def expand_keystream(block: bytes, length: int) -> bytes:
    """Repeat ``block`` and truncate to exactly ``length`` bytes."""
    repeats = -(-length // len(block))
    return (block * repeats)[:length]


class KeystreamCipher:
    """
    Keystream cipher bound to a precomputed session key.

    Useful when the session key has already been derived; for the
    one-shot path see ``encrypt_decrypt``.
    """

    def __init__(self, key: bytes):
        """
        Initialize with a session key.

        Args:
            key: 32-byte session key (only the first 16 bytes are used)
        """
        if len(key) != SESSION_KEY_SIZE:
            raise InvalidKeyLength(
                f"Session key must be {SESSION_KEY_SIZE} bytes, got {len(key)}"
            )
        self._encryption_key = key[:AES_KEY_SIZE]

    def apply(self, message: bytes, nonce: bytes) -> bytes:
        """
        Encrypt or decrypt ``message`` (the operation is its own inverse).

        Args:
            message: Plaintext or ciphertext of any length
            nonce: At least 9 bytes

        Returns:
            Output of the same length as message
        """
        iv = build_iv(nonce)
        if not message:
            return b""

        block = keystream_block(self._encryption_key, iv)
        return xor_bytes(expand_keystream(block, len(message)), message)

    encrypt = apply
    decrypt = apply


def encrypt_decrypt(message: bytes, private_key: bytes, public_key: bytes,
                    nonce: bytes) -> bytes:
    """
    Encrypt or decrypt a message for the key pair and nonce.

    The sender uses (own private, peer public); the receiver uses
    (own private, sender public). Both derive the same keystream.

    Args:
        message: Data to transform
        private_key: 32-byte local private key
        public_key: 64-byte peer public key
        nonce: Exchange nonce (at least 9 bytes)

    Returns:
        Transformed bytes, same length as message

    Raises:
        InvalidNonceLength: If nonce is shorter than 9 bytes
        InvalidKeyLength: If a key has the wrong size
        KeyAgreementError: If the peer public key is not on the curve
    """
    build_iv(nonce)  # Fail on a short nonce before any key agreement
    cipher = KeystreamCipher(session_key(private_key, public_key, nonce))
    output = cipher.apply(message, nonce)
    logger.debug(f"Keystream applied to {len(message)}-byte message")
    return output


# Self-test when run directly
if __name__ == "__main__":
    from .key_agreement import generate_keys, generate_nonce

    print("Keystream Cipher Test")
    print("=" * 50)

    alice = generate_keys()
    bob = generate_keys()
    nonce = generate_nonce()

    plaintext = b"Unlock the doors, this is a longer message than one block."
    ciphertext = encrypt_decrypt(plaintext, alice.private_key, bob.public_key, nonce)
    decrypted = encrypt_decrypt(ciphertext, bob.private_key, alice.public_key, nonce)

    print(f"  Ciphertext: {ciphertext.hex()[:32]}...")
    print(f"  Round trip: {'✓ PASS' if decrypted == plaintext else '✗ FAIL'}")

"""
Secure Channel

Per-peer wrapper over the session layer:
- Holds the local identity key pair and, once established, the peer's
  public key
- Encrypts/decrypts with the keystream cipher under a per-message nonce
- Signs with the local key and verifies against the peer key

Example:
    alice_keys = generate_keys()
    bob_keys = generate_keys()

    alice = SecureChannel(alice_keys)
    bob = SecureChannel(bob_keys)
    alice.establish(bob_keys.public_key)
    bob.establish(alice_keys.public_key)

    nonce, ciphertext = alice.encrypt(b"Hello Bob!")
    signature = alice.sign(ciphertext)

    assert bob.verify(ciphertext, signature)
    plaintext = bob.decrypt(ciphertext, nonce)

The channel keeps no per-message state: the caller owns nonce uniqueness
when passing nonces explicitly.
"""

import logging
from typing import Optional, Tuple

from ..core_crypto.pem_keys import check_public_key
from .key_agreement import KeyPair, generate_nonce
from .keystream import encrypt_decrypt
from .signing import sign, verify


logger = logging.getLogger(__name__)


class SecureChannel:
    """Encrypted, signed exchange between a local key pair and one peer."""

    def __init__(self, identity_keys: KeyPair):
        """
        Initialize secure channel with identity keys.

        Args:
            identity_keys: Local key pair used for ECDH and signing
        """
        self._identity_keys = identity_keys
        self._peer_public_key: Optional[bytes] = None

    @property
    def public_key(self) -> bytes:
        """Local 64-byte public key to hand to the peer."""
        return self._identity_keys.public_key

    @property
    def peer_public_key(self) -> Optional[bytes]:
        return self._peer_public_key

    @property
    def is_established(self) -> bool:
        """Check if channel has been established."""
        return self._peer_public_key is not None

    def establish(self, peer_public_key: bytes) -> None:
        """
        Bind the channel to a peer.

        Args:
            peer_public_key: Peer's 64-byte public key
        """
        check_public_key(peer_public_key)
        self._peer_public_key = bytes(peer_public_key)
        logger.debug(f"Channel established with peer {peer_public_key.hex()[:16]}")

    def _require_established(self) -> bytes:
        if self._peer_public_key is None:
            raise RuntimeError("Channel not established. Call establish() first.")
        return self._peer_public_key

    def encrypt(self, plaintext: bytes,
                nonce: Optional[bytes] = None) -> Tuple[bytes, bytes]:
        """
        Encrypt a message for the peer.

        Args:
            plaintext: Message to encrypt
            nonce: Explicit nonce; a fresh random 9-byte nonce if None

        Returns:
            Tuple of (nonce, ciphertext)
        """
        peer = self._require_established()
        if nonce is None:
            nonce = generate_nonce()
        ciphertext = encrypt_decrypt(
            plaintext, self._identity_keys.private_key, peer, nonce
        )
        return nonce, ciphertext

    def decrypt(self, ciphertext: bytes, nonce: bytes) -> bytes:
        """Decrypt a message received from the peer."""
        peer = self._require_established()
        return encrypt_decrypt(
            ciphertext, self._identity_keys.private_key, peer, nonce
        )

    def sign(self, message: bytes) -> bytes:
        """Sign with the local key pair; returns 64-byte r || s."""
        return sign(
            message,
            self._identity_keys.private_key,
            self._identity_keys.public_key,
        )

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Verify a signature made by the peer."""
        return verify(message, signature, self._require_established())

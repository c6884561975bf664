"""
ECDSA Signatures on Raw Protocol Keys

Signs and verifies with P-256 / SHA-256 using raw key material:
- Raw keys are wrapped into PEM (PKCS#8 / SubjectPublicKeyInfo) and loaded
  through ``cryptography``'s serialization API
- Messages are zero-padded to a 64-byte boundary before signing
- Signatures travel as 64-byte r || s; the DER form only exists at the
  boundary with the signature API
"""

import logging

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.backends import default_backend

from ..exceptions import CryptoPrimitiveFailure
from ..core_crypto.byte_utils import pad64
from ..core_crypto.der_signature import encode_signature, decode_signature
from ..core_crypto.pem_keys import (
    check_public_key,
    key_pair_to_pem,
    public_key_to_pem,
)


logger = logging.getLogger(__name__)


SIGNATURE_ALGORITHM = ec.ECDSA(hashes.SHA256())


def sign(message: bytes, private_key: bytes, public_key: bytes) -> bytes:
    """
    Sign a message with a raw P-256 key pair.

    Args:
        message: Data to sign (padded to 64-byte boundary first)
        private_key: 32-byte private key
        public_key: 64-byte public key belonging to private_key

    Returns:
        64-byte fixed-width signature (r || s)

    Raises:
        InvalidKeyLength: If a key has the wrong size
        CryptoPrimitiveFailure: If the key cannot be loaded or signing fails
    """
    pem = key_pair_to_pem(private_key, public_key)

    try:
        key = serialization.load_pem_private_key(
            pem.encode('ascii'), password=None, backend=default_backend()
        )
        der_signature = key.sign(pad64(message), SIGNATURE_ALGORITHM)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        logger.warning(f"Signing failed: {type(e).__name__}")
        raise CryptoPrimitiveFailure(f"Signing failed: {e}") from e

    signature = decode_signature(der_signature)
    logger.debug(f"Signed {len(message)}-byte message")
    return signature


def verify(message: bytes, signature: bytes, public_key: bytes) -> bool:
    """
    Verify a fixed-width signature.

    Args:
        message: Original data (padded to 64-byte boundary first)
        signature: 64-byte r || s
        public_key: 64-byte signer public key

    Returns:
        True if the signature is valid, False otherwise

    Raises:
        InvalidSignatureEncoding: If signature is not 64 bytes
        InvalidKeyLength: If public_key is not 64 bytes
        CryptoPrimitiveFailure: If public_key is not a valid curve point
    """
    check_public_key(public_key)
    der_signature = encode_signature(signature)
    pem = public_key_to_pem(public_key)

    try:
        key = serialization.load_pem_public_key(
            pem.encode('ascii'), backend=default_backend()
        )
    except (ValueError, UnsupportedAlgorithm) as e:
        logger.warning("Cannot load signer public key")
        raise CryptoPrimitiveFailure(f"Invalid public key: {e}") from e

    try:
        key.verify(der_signature, pad64(message), SIGNATURE_ALGORITHM)
    except InvalidSignature:
        logger.debug("Signature verification failed")
        return False

    return True

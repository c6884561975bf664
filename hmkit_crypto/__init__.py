"""
hmkit-crypto

Cryptographic session layer for a device-pairing / secure-messaging
protocol on NIST P-256:
- Key generation and ECDH key agreement
- HMAC-SHA256 session key derivation
- AES-128 keystream cipher
- ECDSA signatures in 64-byte fixed-width wire format
- PEM encoding of raw keys

All functions are stateless and take raw bytes: 32-byte private keys,
64-byte public keys (x || y) and 64-byte signatures (r || s).
"""

import logging

from .exceptions import (
    HmCryptoError,
    InvalidKeyLength,
    InvalidNonceLength,
    InvalidSignatureEncoding,
    KeyAgreementError,
    CryptoPrimitiveFailure,
)
from .core_crypto.pem_keys import key_pair_to_pem, public_key_to_pem
from .messaging import (
    KeyPair,
    generate_keys,
    hmac,
    compute_secret,
    session_key,
    generate_nonce,
    sign,
    verify,
    encrypt_decrypt,
    KeystreamCipher,
    SecureChannel,
)

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'HmCryptoError',
    'InvalidKeyLength',
    'InvalidNonceLength',
    'InvalidSignatureEncoding',
    'KeyAgreementError',
    'CryptoPrimitiveFailure',
    'KeyPair',
    'generate_keys',
    'hmac',
    'compute_secret',
    'session_key',
    'generate_nonce',
    'sign',
    'verify',
    'encrypt_decrypt',
    'KeystreamCipher',
    'SecureChannel',
    'key_pair_to_pem',
    'public_key_to_pem',
]

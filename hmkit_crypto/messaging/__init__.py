# Session Messaging Module
"""
Session layer for device pairing and secure messaging:
- P-256 key generation and ECDH
- HMAC-SHA256 session keys derived per nonce
- AES-128 keystream cipher (encrypt == decrypt)
- ECDSA signatures in 64-byte fixed-width form
"""

from .key_agreement import (
    KeyPair,
    generate_keys,
    hmac,
    compute_secret,
    session_key,
    generate_nonce,
)
from .signing import sign, verify
from .keystream import KeystreamCipher, encrypt_decrypt
from .secure_channel import SecureChannel

__all__ = [
    'KeyPair',
    'generate_keys',
    'hmac',
    'compute_secret',
    'session_key',
    'generate_nonce',
    'sign',
    'verify',
    'KeystreamCipher',
    'encrypt_decrypt',
    'SecureChannel',
]

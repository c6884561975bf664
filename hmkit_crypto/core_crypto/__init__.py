# Core Encoding Module
"""
Byte-level encoders used by the session layer:
- Fixed-width integer normalization and 64-byte message padding
- ECDSA signature conversion (64-byte r || s <-> DER)
- P-256 PKCS#8 / SubjectPublicKeyInfo DER and PEM construction
"""

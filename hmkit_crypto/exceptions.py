"""
Custom exceptions for hmkit-crypto.

Input validation errors also derive from ValueError so existing
``except ValueError`` handlers keep working.
"""


class HmCryptoError(Exception):
    """Base exception for hmkit-crypto errors."""
    pass


class InvalidKeyLength(HmCryptoError, ValueError):
    """Private or public key is not the expected size."""
    pass


class InvalidNonceLength(HmCryptoError, ValueError):
    """Nonce is too short for the IV construction."""
    pass


class InvalidSignatureEncoding(HmCryptoError, ValueError):
    """Signature is not 64 bytes or not a two-INTEGER DER SEQUENCE."""
    pass


class KeyAgreementError(HmCryptoError):
    """ECDH failed (peer point not on the curve, bad private scalar)."""
    pass


class CryptoPrimitiveFailure(HmCryptoError):
    """The underlying cryptography backend raised an error."""
    pass

# hmkit-crypto Test Suite
"""
Test suite including:
- Unit tests for the encoders and session primitives
- Integration tests for a full pairing exchange
- Security tests (invalid inputs)

Run with: pytest
Coverage: pytest --cov=hmkit_crypto
"""

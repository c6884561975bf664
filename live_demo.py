#!/usr/bin/env python
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                        HMKIT-CRYPTO LIVE DEMO                                ║
╚══════════════════════════════════════════════════════════════════════════════╝

Walks through a device pairing exchange:
- Key generation for a device and a phone
- ECDH shared secret and per-nonce session key
- Keystream encryption of a command
- ECDSA signature in 64-byte wire form and its DER equivalent
"""

import argparse
import logging

from hmkit_crypto import (
    generate_keys, compute_secret, session_key, generate_nonce,
    encrypt_decrypt, sign, verify, public_key_to_pem,
)
from hmkit_crypto.core_crypto.der_signature import encode_signature


def print_header(title):
    """Print a formatted section header"""
    print("\n" + "═" * 70)
    print(f"  {title}")
    print("═" * 70)


def print_step(step_num, description):
    """Print a numbered step"""
    print(f"\n  [{step_num}] {description}")


def pause(enabled, message="Press ENTER to continue..."):
    """Pause for presenter to explain"""
    if enabled:
        print(f"\n  [PAUSE] {message}")
        input()


def main():
    parser = argparse.ArgumentParser(description="hmkit-crypto pairing demo")
    parser.add_argument("--message", default="Unlock doors",
                        help="Command the phone sends to the device")
    parser.add_argument("--interactive", action="store_true",
                        help="Pause between sections")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    print_header("PART 1: KEY GENERATION")

    print_step(1, "Device generates its P-256 key pair")
    device = generate_keys()
    print(f"      Public key: {device.public_key.hex()[:64]}...")

    print_step(2, "Phone generates its P-256 key pair")
    phone = generate_keys()
    print(f"      Public key: {phone.public_key.hex()[:64]}...")

    print_step(3, "Device public key as PEM")
    for line in public_key_to_pem(device.public_key).splitlines():
        print(f"      {line}")

    pause(args.interactive)

    print_header("PART 2: KEY AGREEMENT")

    nonce = generate_nonce()
    print_step(1, f"Nonce: {nonce.hex()}")

    device_secret = compute_secret(device.private_key, phone.public_key)
    phone_secret = compute_secret(phone.private_key, device.public_key)
    print_step(2, f"Shared secrets match: {device_secret == phone_secret}")

    device_session = session_key(device.private_key, phone.public_key, nonce)
    phone_session = session_key(phone.private_key, device.public_key, nonce)
    print_step(3, f"Session keys match: {device_session == phone_session}")

    pause(args.interactive)

    print_header("PART 3: ENCRYPTED, SIGNED COMMAND")

    command = args.message.encode('utf-8')
    ciphertext = encrypt_decrypt(command, phone.private_key, device.public_key, nonce)
    print_step(1, f"Ciphertext: {ciphertext.hex()}")

    signature = sign(ciphertext, phone.private_key, phone.public_key)
    print_step(2, f"Signature (r || s): {signature.hex()[:64]}...")
    print(f"      DER form: {encode_signature(signature).hex()[:64]}...")

    valid = verify(ciphertext, signature, phone.public_key)
    print_step(3, f"Device verifies signature: {valid}")

    plaintext = encrypt_decrypt(ciphertext, device.private_key, phone.public_key, nonce)
    print_step(4, f"Device decrypts: {plaintext.decode('utf-8', errors='replace')}")

    ok = valid and plaintext == command
    print("\n" + "═" * 70)
    print(f"  {'✓ Exchange complete' if ok else '✗ Exchange failed'}")
    print("═" * 70)
    return 0 if ok else 1


if __name__ == "__main__":
    raise SystemExit(main())

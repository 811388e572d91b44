#!/usr/bin/env python3
"""
Check the configured RS256 key pair (JWT_PRIVATE_KEY / JWT_PUBLIC_KEY).

Exits non-zero when the keys are missing or unusable.

Usage:
    python scripts/verify_keys.py
"""

import sys

from eventops.core.config import settings
from eventops.core.keys import check_keypair


def main():
    print("=" * 80)
    print("🔍 JWT Key Verification")
    print("=" * 80)
    print(f"Algorithm: {settings.JWT_ALGORITHM}")
    print(f"Key ID:    {settings.JWT_KEY_ID}")
    print()

    if not settings.JWT_PRIVATE_KEY or not settings.JWT_PUBLIC_KEY:
        print("❌ JWT_PRIVATE_KEY and JWT_PUBLIC_KEY must both be set")
        return 1

    result = check_keypair(settings.JWT_PRIVATE_KEY, settings.JWT_PUBLIC_KEY, settings.JWT_KEY_ID)
    for warning in result.warnings:
        print(f"⚠️  {warning}")
    for error in result.errors:
        print(f"❌ {error}")

    if not result.ok:
        return 1
    if settings.JWT_ALGORITHM != "RS256":
        print("⚠️  Keys are valid but JWT_ALGORITHM is not RS256, so they are not in use")
    print("✅ Key pair is valid: tokens signed with the private key verify with the public key")
    return 0


if __name__ == "__main__":
    sys.exit(main())

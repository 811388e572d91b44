#!/usr/bin/env python3
"""
Generate an RSA key pair for RS256 access tokens.

Writes jwt_private.pem, jwt_public.pem and jwks.json to the output
directory and prints the matching .env lines.

Usage:
    python scripts/generate_keys.py [output_dir] [key_id]
"""

import json
import os
import sys

from eventops.core.keys import generate_rsa_keypair, to_env_value
from eventops.core.security import build_jwks


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    output_dir = argv[0] if argv else "keys"
    key_id = argv[1] if len(argv) > 1 else "eventops-key-1"

    print("=" * 80)
    print("🔑 JWT Key Generation")
    print("=" * 80)

    os.makedirs(output_dir, exist_ok=True)
    private_pem, public_pem = generate_rsa_keypair()
    jwks = build_jwks(public_pem, key_id)

    files = {
        "jwt_private.pem": private_pem,
        "jwt_public.pem": public_pem,
        "jwks.json": json.dumps(jwks, indent=2),
    }
    for name, content in files.items():
        path = os.path.join(output_dir, name)
        with open(path, "w") as f:
            f.write(content)
        print(f"✅ Wrote {path}")

    os.chmod(os.path.join(output_dir, "jwt_private.pem"), 0o600)

    print()
    print("Add these to your .env:")
    print("-" * 80)
    print("JWT_ALGORITHM=RS256")
    print(f"JWT_KEY_ID={key_id}")
    print(f'JWT_PRIVATE_KEY="{to_env_value(private_pem)}"')
    print(f'JWT_PUBLIC_KEY="{to_env_value(public_pem)}"')
    print("-" * 80)
    return 0


if __name__ == "__main__":
    sys.exit(main())

# eventops/core/security.py
"""
Password hashing and access-token helpers.

Tokens are HS256 by default. With JWT_ALGORITHM=RS256 they are signed with
the PKCS8 private key from settings and verified with the matching public
key, which is also published as a JWKS document.
"""

import base64
import hashlib
import hmac
import re
import secrets
from datetime import timedelta
from typing import List, Optional

from jose import jwk, jwt

from eventops.core.config import settings
from eventops.core.keys import normalize_pem
from eventops.utils.time_utils import utcnow

PASSWORD_SCHEME = "pbkdf2_sha256"


def hash_password(password: str, *, iterations: Optional[int] = None) -> str:
    """Hash a password as `pbkdf2_sha256$<iterations>$<salt>$<digest>`."""
    iterations = iterations or settings.PASSWORD_HASH_ITERATIONS
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), iterations
    )
    encoded = base64.b64encode(digest).decode("ascii")
    return f"{PASSWORD_SCHEME}${iterations}${salt}${encoded}"


def verify_password(password: str, password_hash: str) -> bool:
    try:
        scheme, iterations, salt, expected = password_hash.split("$", 3)
    except ValueError:
        return False
    if scheme != PASSWORD_SCHEME:
        return False

    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), salt.encode("utf-8"), int(iterations)
    )
    actual = base64.b64encode(digest).decode("ascii")
    return hmac.compare_digest(actual, expected)


PASSWORD_MIN_LENGTH = 12
PASSWORD_SPECIAL_CHARS = "!@#$%^&*(),.?\":{}|<>[]\\;'`~_+=-"


def password_policy_errors(password: str) -> List[str]:
    """Return the password rules `password` fails, empty when it is acceptable."""
    errors = []
    if len(password) < PASSWORD_MIN_LENGTH:
        errors.append(f"At least {PASSWORD_MIN_LENGTH} characters")
    if not re.search(r"[A-Z]", password):
        errors.append("At least 1 uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("At least 1 lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("At least 1 number")
    if not any(char in PASSWORD_SPECIAL_CHARS for char in password):
        errors.append("At least 1 special character (!@#$%^&* etc.)")
    return errors


def _signing_key() -> str:
    if settings.JWT_ALGORITHM == "RS256":
        if not settings.JWT_PRIVATE_KEY:
            raise RuntimeError("JWT_PRIVATE_KEY must be set when JWT_ALGORITHM=RS256")
        return normalize_pem(settings.JWT_PRIVATE_KEY)
    return settings.JWT_SECRET


def _verification_key() -> str:
    if settings.JWT_ALGORITHM == "RS256":
        if not settings.JWT_PUBLIC_KEY:
            raise RuntimeError("JWT_PUBLIC_KEY must be set when JWT_ALGORITHM=RS256")
        return normalize_pem(settings.JWT_PUBLIC_KEY)
    return settings.JWT_SECRET


def create_access_token(
    *,
    subject: str,
    role: str,
    email: Optional[str] = None,
    org_id: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    expire = utcnow() + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    claims = {
        "sub": subject,
        "role": role,
        "exp": int(expire.timestamp()),
    }
    if email:
        claims["email"] = email
    if org_id:
        claims["orgId"] = org_id

    headers = {"kid": settings.JWT_KEY_ID} if settings.JWT_ALGORITHM == "RS256" else None
    return jwt.encode(
        claims, _signing_key(), algorithm=settings.JWT_ALGORITHM, headers=headers
    )


def decode_access_token(token: str) -> dict:
    """Decode and verify a token. Raises jose.JWTError on any failure."""
    return jwt.decode(token, _verification_key(), algorithms=[settings.JWT_ALGORITHM])


def build_jwks(public_key_pem: str, key_id: str) -> dict:
    """Build a JWKS document exposing a single RS256 public key."""
    key = jwk.construct(normalize_pem(public_key_pem), algorithm="RS256").to_dict()
    key.update({"kid": key_id, "use": "sig", "alg": "RS256"})
    return {"keys": [key]}

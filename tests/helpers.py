"""
Key material and bearer-token builders for the Taskboard tests.

The RSA pair below is what ``conftest`` hands to the ``testing`` profile,
so tokens minted here are accepted by the app under test.  Tokens are
built with PyJWT directly rather than through ``taskboard.auth`` so that
tests can also forge expired or foreign-signed credentials.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

DEFAULT_PASSWORD = "StrongPass123!"


def generate_throwaway_key_pair() -> tuple[str, str]:
    """Return a new ``(private_pem, public_pem)`` pair unknown to the app."""
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    private_pem = key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    )
    public_pem = key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    )
    return private_pem.decode(), public_pem.decode()


TEST_PRIVATE_KEY, TEST_PUBLIC_KEY = generate_throwaway_key_pair()


def create_test_token(
    user_id: int = 1,
    email: str = "user_one@example.com",
    private_key: str = TEST_PRIVATE_KEY,
    expired: bool = False,
) -> str:
    """Mint an RS256 token for *user_id*; ``expired`` puts ``exp`` an hour in the past."""
    issued = datetime.now(timezone.utc)
    lifetime = timedelta(hours=-1 if expired else 1)
    claims = {
        "user_id": user_id,
        "email": email,
        "iat": int(issued.timestamp()),
        "exp": int((issued + lifetime).timestamp()),
    }
    return jwt.encode(claims, private_key, algorithm="RS256")


def auth_headers(token: str) -> dict[str, str]:
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

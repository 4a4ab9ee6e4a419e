"""Password hashing and access-token helpers."""
from __future__ import annotations

from datetime import timedelta

import nacl.exceptions
import nacl.pwhash
from jose import JWTError, jwt

from blog_stage.core.settings import settings
from blog_stage.db.base import utcnow

ACCESS_TOKEN_PURPOSE = "access"
EMAIL_VERIFICATION_PURPOSE = "verify-email"


def hash_password(password: str) -> str:
    """Return an argon2id hash of ``password`` suitable for storage."""
    return nacl.pwhash.str(password.encode("utf-8")).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    """Check ``password`` against a stored argon2id hash."""
    try:
        return nacl.pwhash.verify(password_hash.encode("ascii"), password.encode("utf-8"))
    except nacl.exceptions.InvalidkeyError:
        return False


def _encode(claims: dict[str, object], expires_in: timedelta) -> str:
    to_encode = dict(claims)
    to_encode["exp"] = utcnow() + expires_in
    encoded_jwt: str = jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
    )
    return encoded_jwt


def create_access_token(subject: str, extra_claims: dict[str, str] | None = None) -> str:
    """Create JWT access token for user authentication."""
    claims: dict[str, object] = {"sub": subject, "purpose": ACCESS_TOKEN_PURPOSE}
    if extra_claims:
        claims.update(extra_claims)
    return _encode(claims, timedelta(minutes=settings.access_token_expire_minutes))


def create_email_verification_token(subject: str) -> str:
    """Create a short-lived token embedded in verification links."""
    return _encode(
        {"sub": subject, "purpose": EMAIL_VERIFICATION_PURPOSE},
        timedelta(minutes=settings.email_verification_expire_minutes),
    )


def decode_token(token: str, purpose: str = ACCESS_TOKEN_PURPOSE) -> str:
    """Decode ``token`` and return its subject.

    Raises:
        JWTError: If the token is malformed, expired, issued for another
            purpose or carries no subject.
    """
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    if payload.get("purpose") != purpose:
        raise JWTError("Token purpose mismatch")
    subject = payload.get("sub")
    if not subject:
        raise JWTError("Token has no subject")
    return str(subject)

"""
Security helpers: auth-token verification and password hashing.

Tokens are JSON Web Tokens signed with HMAC‑SHA256 and base64url
encoded.  They embed the user id (``sub``), an ``is_admin`` flag and
an expiration timestamp (``exp``).  Clients send them in the
``x-auth-token`` header.  Verification is stateless: a valid
signature and an unexpired ``exp`` are enough to authenticate the
request, the users table is not consulted.

Passwords are stored as PBKDF2‑HMAC‑SHA256 digests with a random salt.
"""

import base64
import hashlib
import hmac
import json
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader

from .config import settings

TOKEN_HEADER = "x-auth-token"
PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed token carrying ``data`` as claims.

    Parameters
    ----------
    data : dict
        Claims to embed, typically ``{"sub": "<user id>", "is_admin": False}``.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        ``header.payload.signature``, each part base64url encoded.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta if expires_delta is not None else settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify a token and return its claims.

    Returns ``None`` when the token is malformed, the signature does not
    match ``settings.secret_key`` or the token has expired.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, TypeError):
        # binascii.Error, JSONDecodeError and UnicodeDecodeError are all ValueErrors
        return None
    if not isinstance(data, dict):
        return None
    exp = data.get("exp")
    if not isinstance(exp, (int, float)) or exp < time.time():
        return None
    return data


token_header = APIKeyHeader(name=TOKEN_HEADER, auto_error=False)


def get_current_user(token: Optional[str] = Depends(token_header)) -> Dict[str, Any]:
    """Dependency that authenticates the caller.

    Raises 401 when no token is supplied and 400 when the token cannot
    be verified.  On success returns the identity: ``user_id`` and
    ``is_admin`` alongside the raw claims.
    """
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access denied. No token provided.",
        )
    payload = decode_access_token(token)
    if not payload or "sub" not in payload:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid token.")
    try:
        payload["user_id"] = int(payload["sub"])
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid token.")
    payload["is_admin"] = bool(payload.get("is_admin", False))
    return payload


def require_admin(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    """Dependency that additionally requires the admin role flag (403 otherwise)."""
    if not current_user["is_admin"]:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied.")
    return current_user


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    Returns the salt and digest in hex, separated by ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"

"""
Caller identity helpers.

The registry attributes likes and user registrations to the *caller
principal*.  A caller proves its principal with a signed bearer token:
a lightweight JSON Web Token using HMAC‑SHA256 signatures and base64url
encoding, whose ``sub`` claim is the principal and whose ``exp`` claim
bounds its lifetime.  Requests without an ``Authorization`` header are
served as the anonymous principal; a header carrying an invalid or
expired token is rejected with HTTP 401.
"""

import base64
import hashlib
import hmac
import json
import logging
import time
from typing import Dict, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, settings as default_settings
from .identity import ANONYMOUS_PRINCIPAL

logger = logging.getLogger(__name__)


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(
    principal: str,
    expires_delta: Optional[int] = None,
    config: Optional[Settings] = None,
) -> str:
    """Create a signed token asserting ``principal`` as the caller.

    Parameters
    ----------
    principal : str
        Caller principal stored in the ``sub`` claim.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``access_token_expire_minutes * 60`` from the settings.
    config : Optional[Settings]
        Settings providing the signing key; the module-level settings
        are used when omitted.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    config = config or default_settings
    exp_seconds = expires_delta or config.access_token_expire_minutes * 60
    claims = {"sub": principal, "exp": int(time.time()) + exp_seconds}
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(claims, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, config.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, config: Optional[Settings] = None) -> Optional[Dict[str, object]]:
    """Verify a token and return its claims, or ``None`` if it is invalid or expired."""
    config = config or default_settings
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        claims = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, UnicodeDecodeError):
        return None
    if not hmac.compare_digest(_sign(signing_input, config.secret_key), actual_sig):
        return None
    if not isinstance(claims, dict) or not claims.get("sub"):
        return None
    try:
        expires_at = int(claims.get("exp"))
    except (TypeError, ValueError):
        return None
    if expires_at < int(time.time()):
        return None
    return claims


security = HTTPBearer(auto_error=False)


def get_caller(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """Dependency returning the ambient caller principal for a request."""
    if credentials is None:
        return ANONYMOUS_PRINCIPAL
    config = getattr(request.app.state, "settings", None)
    claims = decode_access_token(credentials.credentials, config)
    if claims is None:
        logger.info("Rejected request with invalid or expired token")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return str(claims["sub"])

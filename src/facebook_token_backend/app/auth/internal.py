# src/facebook_token_backend/app/auth/internal.py
from __future__ import annotations

import os
import time
import jwt
from typing import Optional, Dict, Any
from fastapi import HTTPException, Request, status

from facebook_token_backend.app.auth.lookup import RequestView, parse_oauth2_token
from facebook_token_backend.app.core.trace import auth_trace

# =========================
# Session token config (minted after a successful Facebook token exchange)
# =========================
JWT_SECRET  = os.getenv("JWT_SECRET", "dev_secret_do_not_use_in_prod_change_me")
JWT_ISS     = os.getenv("JWT_ISS", "facebook-token-backend")
JWT_AUD     = os.getenv("JWT_AUD", "facebook-token-api")
ALGO        = "HS256"
SESSION_TTL = int(os.getenv("JWT_SESSION_TTL_SEC", "900"))   # 15m

DEFAULT_SCOPE = "profile:read"

# PyJWT error -> 401 detail; most specific first
_DECODE_ERRORS = (
    (jwt.ExpiredSignatureError, "session token expired"),
    (jwt.InvalidIssuerError,    "session token issuer mismatch"),
    (jwt.InvalidAudienceError,  "session token audience mismatch"),
)

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )

def issue_session_token(user: Dict[str, Any], scope: str = DEFAULT_SCOPE, ttl: Optional[int] = None) -> str:
    """
    Mint a short-lived session token for a local user created from a
    Facebook profile. No refresh token: clients re-exchange a Facebook token.
    """
    now = int(time.time())
    claims: Dict[str, Any] = {
        "iss": JWT_ISS,
        "aud": JWT_AUD,
        "sub": user["id"],
        "scope": scope,
        "email": user.get("email"),
        "name": user.get("display_name") or None,
        "iat": now,
        "exp": now + (ttl or SESSION_TTL),
    }
    auth_trace("session.issue", sub=claims["sub"], scope=scope, exp=claims["exp"])
    return jwt.encode(claims, JWT_SECRET, algorithm=ALGO)

def verify_session_token(token: str, required_scope: Optional[str] = None) -> Dict[str, Any]:
    """Decode a session token; 401 when invalid, 403 when the scope is missing."""
    try:
        claims = jwt.decode(
            token,
            JWT_SECRET,
            algorithms=[ALGO],
            audience=JWT_AUD,
            issuer=JWT_ISS,
            options={"require": ["exp", "iss", "aud", "sub"]},
        )
    except jwt.PyJWTError as ex:
        detail = next((msg for kind, msg in _DECODE_ERRORS if isinstance(ex, kind)), f"invalid session token: {ex}")
        auth_trace("session.reject", reason=type(ex).__name__)
        raise _unauthorized(detail)

    if required_scope and required_scope not in (claims.get("scope") or "").split():
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="insufficient_scope")
    return claims

def session_required(required_scope: Optional[str] = None):
    """FastAPI dependency: `Authorization: Bearer <session token>` -> claims."""
    async def dep(request: Request) -> Dict[str, Any]:
        token = parse_oauth2_token(RequestView(headers=request.headers))
        if not token:
            raise _unauthorized("Missing session token")
        return verify_session_token(token.strip(), required_scope=required_scope)
    return dep

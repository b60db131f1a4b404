# src/facebook_token_backend/app/api/routes/auth.py
from __future__ import annotations

from functools import lru_cache
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from facebook_token_backend.app.auth.internal import (
    DEFAULT_SCOPE,
    SESSION_TTL,
    issue_session_token,
    session_required,
)
from facebook_token_backend.app.auth.profile import Profile
from facebook_token_backend.app.auth.strategy import FacebookTokenStrategy
from facebook_token_backend.app.core.config import StrategyOptions
from facebook_token_backend.app.security.base import token_auth_required
from facebook_token_backend.app.services.db import db
from facebook_token_backend.app.services.identity import map_facebook_profile_to_user

router = APIRouter(tags=["auth"])


class SessionToken(BaseModel):
    access_token: str
    expires_in: int
    token_type: str = "Bearer"
    user: Dict[str, Any]


def verify_facebook_user(
    access_token: str, refresh_token: Optional[str], profile: Profile
) -> Tuple[Optional[Dict[str, Any]], Dict[str, str]]:
    user = map_facebook_profile_to_user(db, profile)
    if user is None:
        return None, {"message": "Facebook profile has no id"}
    return user, {"scope": DEFAULT_SCOPE}


# Built lazily so .env / test env is read first
@lru_cache(maxsize=1)
def get_strategy() -> FacebookTokenStrategy:
    return FacebookTokenStrategy(StrategyOptions.from_env(), verify_facebook_user)


facebook_token_required = token_auth_required(get_strategy)


@router.api_route("/auth/facebook/token", methods=["GET", "POST"], response_model=SessionToken)
async def facebook_token_exchange(user: Dict[str, Any] = Depends(facebook_token_required)):
    """
    Exchange a Facebook access token (body, query, header, or Bearer) for an
    internal session token.
    """
    return SessionToken(
        access_token=issue_session_token(user),
        expires_in=SESSION_TTL,
        user=user,
    )


@router.get("/auth/me")
def auth_me(claims: Dict[str, Any] = Depends(session_required(DEFAULT_SCOPE))):
    """Decoded claims of the session token."""
    return claims

# src/facebook_token_backend/app/core/config.py
from __future__ import annotations

import os
from typing import Dict, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from facebook_token_backend.app.auth.profile import FIELD_MAP, ProfileImage

# ------------------------
# Facebook endpoints
# ------------------------
AUTHORIZATION_URL = "https://www.facebook.com/v2.4/dialog/oauth"
TOKEN_URL         = "https://graph.facebook.com/oauth/access_token"
PROFILE_URL       = "https://graph.facebook.com/v2.4/me"

DEFAULT_PROFILE_FIELDS: Tuple[str, ...] = ("id", "displayName", "name", "emails")

_TRUE = ("1", "true", "yes", "on")


class StrategyOptions(BaseModel):
    """
    Options for FacebookTokenStrategy. Frozen: safe to share across
    concurrent authentication attempts.
    """
    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: Optional[str] = None
    authorization_url: str = AUTHORIZATION_URL
    token_url: str = TOKEN_URL
    access_token_field: str = "access_token"
    refresh_token_field: str = "refresh_token"
    profile_url: str = PROFILE_URL
    # None disables the `fields` query parameter entirely
    profile_fields: Optional[Tuple[str, ...]] = DEFAULT_PROFILE_FIELDS
    profile_image: ProfileImage = Field(default_factory=ProfileImage)
    enable_proof: bool = True
    pass_req_to_callback: bool = False
    field_map: Dict[str, Union[str, Tuple[str, ...]]] = Field(default_factory=lambda: dict(FIELD_MAP))
    timeout: float = 10.0

    @model_validator(mode="after")
    def _check_secret(self) -> "StrategyOptions":
        if not self.client_id:
            raise ValueError("client_id is required")
        if self.enable_proof and not self.client_secret:
            raise ValueError("client_secret is required when enable_proof is on")
        return self

    @classmethod
    def from_env(cls, **overrides) -> "StrategyOptions":
        """
        Build options from FACEBOOK_* environment variables.
        Keyword overrides win over the environment.
        """
        env: Dict[str, object] = {
            "client_id": os.getenv("FACEBOOK_CLIENT_ID", "").strip(),
            "client_secret": os.getenv("FACEBOOK_CLIENT_SECRET", "").strip() or None,
            "profile_url": os.getenv("FACEBOOK_PROFILE_URL", PROFILE_URL).strip(),
            "access_token_field": os.getenv("FACEBOOK_ACCESS_TOKEN_FIELD", "access_token").strip(),
            "refresh_token_field": os.getenv("FACEBOOK_REFRESH_TOKEN_FIELD", "refresh_token").strip(),
            "enable_proof": os.getenv("FACEBOOK_ENABLE_PROOF", "true").strip().lower() in _TRUE,
            "pass_req_to_callback": os.getenv("FACEBOOK_PASS_REQ_TO_CALLBACK", "").strip().lower() in _TRUE,
            "timeout": float(os.getenv("FACEBOOK_HTTP_TIMEOUT", "10")),
        }

        fields = os.getenv("FACEBOOK_PROFILE_FIELDS")
        if fields is not None:
            env["profile_fields"] = tuple(f.strip() for f in fields.split(",") if f.strip())

        width = os.getenv("FACEBOOK_PROFILE_IMAGE_WIDTH")
        height = os.getenv("FACEBOOK_PROFILE_IMAGE_HEIGHT")
        env["profile_image"] = ProfileImage(
            width=int(width) if width else None,
            height=int(height) if height else None,
        )

        env.update(overrides)
        return cls(**env)

# src/facebook_token_backend/app/auth/strategy.py
from __future__ import annotations

import hashlib
import hmac
import inspect
import json
from types import MappingProxyType
from typing import Any, Callable, Optional
from urllib.parse import quote

import httpx

from facebook_token_backend.app.auth.errors import (
    OAuth2HTTPError,
    ProfileFetchError,
    ProfileParseError,
)
from facebook_token_backend.app.auth.lookup import RequestView, lookup, parse_oauth2_token
from facebook_token_backend.app.auth.oauth2 import OAuth2Client, append_query
from facebook_token_backend.app.auth.outcome import AuthOutcome, Error, Failure, Success
from facebook_token_backend.app.auth.profile import Profile, convert_profile_fields, normalize_profile
from facebook_token_backend.app.core.config import StrategyOptions
from facebook_token_backend.app.core.trace import auth_trace

# verify(access_token, refresh_token, profile)            -> user | (user, info)
# verify(req, access_token, refresh_token, profile)       -> same, when pass_req_to_callback
# May be sync or async; raising means error, a falsy user means failure.
VerifyFn = Callable[..., Any]


def compute_proof(client_secret: str, access_token: str) -> str:
    """appsecret_proof: hex HMAC-SHA256 of the access token keyed by the app secret."""
    return hmac.new(
        client_secret.encode("utf-8"), access_token.encode("utf-8"), hashlib.sha256
    ).hexdigest()


class FacebookTokenStrategy:
    """
    Authenticates a request carrying a Facebook access token directly
    (body, query, header or `Authorization: Bearer`), verified against the
    Graph API `/me` endpoint.

    Example:
        strategy = FacebookTokenStrategy(
            StrategyOptions(client_id="123", client_secret="shhh"),
            lambda access, refresh, profile: users.find_or_create(profile.id),
        )
        outcome = await strategy.authenticate(view)
    """
    name = "facebook-token"

    def __init__(
        self,
        options: StrategyOptions,
        verify: VerifyFn,
        *,
        oauth2: Optional[OAuth2Client] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        if not callable(verify):
            raise TypeError("FacebookTokenStrategy requires a verify callback")
        self.options = options
        self._verify = verify
        self._field_map = MappingProxyType(dict(options.field_map))
        self._oauth2 = oauth2 or OAuth2Client(
            options.client_id,
            options.client_secret,
            options.authorization_url,
            options.token_url,
            http_client=http_client,
            timeout=options.timeout,
        )
        # Graph API GETs carry the token as a query parameter
        self._oauth2.use_authorization_header_for_get = False

    # ------------------------
    # Token lookup
    # ------------------------
    def lookup(self, req: RequestView, field_name: str) -> Optional[str]:
        return lookup(req, field_name)

    def parse_oauth2_token(self, req: RequestView) -> Optional[str]:
        return parse_oauth2_token(req)

    # ------------------------
    # Profile fetch
    # ------------------------
    def profile_request_url(self, access_token: str) -> str:
        opts = self.options
        url = opts.profile_url

        # https://developers.facebook.com/docs/graph-api/securing-requests
        if opts.enable_proof:
            proof = compute_proof(opts.client_secret or "", access_token)
            url = append_query(url, f"appsecret_proof={quote(proof, safe='')}")

        if opts.profile_fields is not None:
            fields = convert_profile_fields(opts.profile_fields, self._field_map)
            url = append_query(url, f"fields={fields}")

        return url

    async def user_profile(self, access_token: str) -> Profile:
        """
        Fetch `/me` and normalize it.

        Raises:
            ProfileFetchError: transport failure, unusable request URL, or non-2xx from Facebook.
            ProfileParseError: body is not a JSON object.
        """
        url = self.profile_request_url(access_token)
        auth_trace(
            "strategy.fetch.begin",
            proof=self.options.enable_proof,
            fields=self.options.profile_fields is not None,
        )
        # InvalidURL is not an HTTPError; an oversized client token raises it
        try:
            body, _ = await self._oauth2.get(url, access_token)
        except (httpx.HTTPError, httpx.InvalidURL, OAuth2HTTPError) as ex:
            auth_trace("strategy.fetch.fail", err=type(ex).__name__)
            raise ProfileFetchError(ex) from ex

        try:
            data = json.loads(body)
        except ValueError as ex:
            auth_trace("strategy.fetch.bad_json", length=len(body))
            raise ProfileParseError(ex) from ex
        if not isinstance(data, dict):
            raise ProfileParseError(message=f"Failed to parse user profile: expected object, got {type(data).__name__}")

        return normalize_profile(data, self.options.profile_image, raw=body)

    # ------------------------
    # Authenticate
    # ------------------------
    async def _run_verify(self, req: RequestView, access_token: str, refresh_token: Optional[str], profile: Profile) -> Any:
        if self.options.pass_req_to_callback:
            result = self._verify(req, access_token, refresh_token, profile)
        else:
            result = self._verify(access_token, refresh_token, profile)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def authenticate(self, req: RequestView) -> AuthOutcome:
        """
        Run one authentication attempt. Exactly one outcome is returned:
        Failure (no token / verify rejected), Error (fetch or verify raised),
        or Success.
        """
        field_name = self.options.access_token_field
        access_token = self.lookup(req, field_name)
        refresh_token = self.lookup(req, self.options.refresh_token_field)

        if not access_token:
            auth_trace("strategy.missing_token", field=field_name)
            return Failure({"message": f"You should provide {field_name}"})
        access_token = str(access_token)

        try:
            profile = await self.user_profile(access_token)
        except (ProfileFetchError, ProfileParseError) as ex:
            return Error(ex)

        try:
            result = await self._run_verify(req, access_token, refresh_token, profile)
        except Exception as ex:
            auth_trace("strategy.verify.error", err=type(ex).__name__)
            return Error(ex)

        user, info = result if isinstance(result, tuple) and len(result) == 2 else (result, None)
        if not user:
            auth_trace("strategy.verify.rejected", id=profile.id)
            return Failure(info)

        auth_trace("strategy.ok", id=profile.id)
        return Success(user, info)

# src/facebook_token_backend/app/auth/oauth2.py
from __future__ import annotations

from typing import Dict, Optional, Tuple
from urllib.parse import quote, urlsplit, urlunsplit

import httpx

from facebook_token_backend.app.auth.errors import OAuth2HTTPError
from facebook_token_backend.app.core.trace import auth_trace


def append_query(url: str, fragment: str) -> str:
    """Append a raw `k=v` fragment to the URL query (joined with '&' if one exists)."""
    parts = urlsplit(url)
    query = f"{parts.query}&{fragment}" if parts.query else fragment
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


class OAuth2Client:
    """
    Generic OAuth2 endpoint holder + protected-resource GET.

    The strategy holds one of these rather than subclassing an OAuth2 base.
    Only `get` is exercised by the token strategy; the authorize/token
    endpoints are kept for callers that need to advertise them.
    """
    access_token_name = "access_token"

    def __init__(
        self,
        client_id: str,
        client_secret: Optional[str],
        authorization_url: str,
        token_url: str,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        if not client_id:
            raise ValueError("OAuth2Client requires a client_id")
        self.client_id = client_id
        self.client_secret = client_secret
        self.authorization_url = authorization_url
        self.token_url = token_url
        self.use_authorization_header_for_get = False
        self._client = http_client
        self._timeout = timeout

    def _prepare(self, url: str, access_token: str) -> Tuple[str, Dict[str, str]]:
        headers: Dict[str, str] = {}
        if self.use_authorization_header_for_get:
            headers["Authorization"] = f"Bearer {access_token}"
        else:
            url = append_query(url, f"{self.access_token_name}={quote(access_token, safe='')}")
        return url, headers

    async def get(self, url: str, access_token: str) -> Tuple[str, httpx.Response]:
        """
        GET a protected resource. Returns (body_text, response).
        Raises OAuth2HTTPError on non-2xx; httpx.HTTPError on transport failure.
        """
        url, headers = self._prepare(url, access_token)
        own = self._client or httpx.AsyncClient(timeout=self._timeout)
        try:
            r = await own.get(url, headers=headers)
        finally:
            if self._client is None:
                await own.aclose()

        auth_trace("oauth2.get", status=r.status_code, header_mode=self.use_authorization_header_for_get)
        if not 200 <= r.status_code < 300:
            raise OAuth2HTTPError(r.status_code, r.text)
        return r.text, r

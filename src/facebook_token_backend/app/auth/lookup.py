# src/facebook_token_backend/app/auth/lookup.py
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from fastapi import Request

OAUTH2_AUTHORIZATION_FIELD = "Authorization"
_BEARER_RE = re.compile(r"Bearer (.*)")


@dataclass(frozen=True)
class RequestView:
    """
    Framework-neutral view of an inbound request.

    `headers` may be a plain dict (exact/lowercase lookups are tried) or a
    case-insensitive mapping such as Starlette's `Headers`.
    """
    body: Mapping[str, Any] = field(default_factory=dict)
    query: Mapping[str, Any] = field(default_factory=dict)
    headers: Mapping[str, Any] = field(default_factory=dict)
    request: Any = None


def _header(headers: Mapping[str, Any], name: str) -> Any:
    return headers.get(name) or headers.get(name.lower())


def parse_oauth2_token(req: RequestView) -> Optional[str]:
    """
    RFC 6750 bearer token from the Authorization header (header name is
    looked up case-insensitively). None when missing or malformed.
    """
    value = _header(req.headers, OAUTH2_AUTHORIZATION_FIELD)
    if not value:
        return None
    match = _BEARER_RE.search(str(value))
    return (match and match.group(1)) or None


def lookup(req: RequestView, field_name: str) -> Optional[str]:
    """
    First truthy value for `field_name` in body, query, headers (exact then
    lowercased), falling back to the bearer token.
    """
    return (
        req.body.get(field_name)
        or req.query.get(field_name)
        or _header(req.headers, field_name)
        or parse_oauth2_token(req)
    )


async def request_view_from_fastapi(request: Request) -> RequestView:
    """Snapshot a FastAPI/Starlette request. Bodies that are not a JSON object or form are ignored."""
    body: Mapping[str, Any] = {}
    content_type = (request.headers.get("content-type") or "").lower()
    if content_type.startswith("application/json"):
        try:
            parsed = await request.json()
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            body = parsed
    elif content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
        form = await request.form()
        body = {k: v for k, v in form.items() if isinstance(v, str)}

    return RequestView(
        body=body,
        query=request.query_params,
        headers=request.headers,
        request=request,
    )

# src/facebook_token_backend/app/auth/errors.py
from __future__ import annotations

from typing import Optional


class StrategyError(Exception):
    """Base for errors the strategy surfaces as an authentication *error* (not a failure)."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class ProfileFetchError(StrategyError):
    """Provider unreachable or rejected the profile request."""

    def __init__(self, cause: Optional[BaseException] = None, message: str = "Failed to fetch user profile"):
        super().__init__(message, cause)


class ProfileParseError(StrategyError):
    """Provider answered, but the body is not a JSON object."""

    def __init__(self, cause: Optional[BaseException] = None, message: str = "Failed to parse user profile"):
        super().__init__(message, cause)


class OAuth2HTTPError(Exception):
    """Non-2xx response from an OAuth2 endpoint."""

    def __init__(self, status_code: int, data: str = ""):
        self.status_code = status_code
        self.data = data
        super().__init__(f"HTTP {status_code}: {data[:200]}")

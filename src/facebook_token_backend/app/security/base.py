# src/facebook_token_backend/app/security/base.py
from __future__ import annotations

from typing import Any, Callable

from fastapi import HTTPException, Request, status

from facebook_token_backend.app.auth.errors import StrategyError
from facebook_token_backend.app.auth.lookup import request_view_from_fastapi
from facebook_token_backend.app.auth.outcome import Error, Failure, Success
from facebook_token_backend.app.auth.strategy import FacebookTokenStrategy
from facebook_token_backend.app.core.trace import auth_trace


def token_auth_required(get_strategy: Callable[[], FacebookTokenStrategy]):
    """
    Route-level dependency that runs a token strategy.

    Example usage:
      @router.post("/auth/facebook/token")
      async def exchange(user = Depends(token_auth_required(get_strategy))):
          ...

    Success -> returns the user; Failure -> 401; provider error -> 502; any other error -> 500.
    """
    async def dep(request: Request) -> Any:
        strategy = get_strategy()
        view = await request_view_from_fastapi(request)
        outcome = await strategy.authenticate(view)

        if isinstance(outcome, Success):
            return outcome.user

        if isinstance(outcome, Failure):
            auth_trace("security.fail", strategy=strategy.name, message=outcome.message)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail=outcome.message,
                headers={"WWW-Authenticate": "Bearer"},
            )

        if isinstance(outcome, Error):
            cause = outcome.cause
            auth_trace("security.error", strategy=strategy.name, err=type(cause).__name__)
            if isinstance(cause, StrategyError):
                raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(cause)) from cause
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="authentication error") from cause

        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"unexpected authentication outcome: {type(outcome).__name__}",
        )

    return dep

# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import pytest

# ---------- Paths & .env ----------
ROOT = Path(__file__).resolve().parents[1]  # repo root
# Optional: load .env from repo root for local runs (CI may inject env separately)
try:
    from dotenv import load_dotenv  # type: ignore
    env_path = ROOT / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path, override=False)
except ImportError:
    pass

from facebook_token_backend.app.auth.lookup import RequestView  # noqa: E402
from facebook_token_backend.app.auth.strategy import FacebookTokenStrategy  # noqa: E402
from facebook_token_backend.app.core.config import StrategyOptions  # noqa: E402

CLIENT_ID = "123456789"
CLIENT_SECRET = "shhh-its-a-secret"

FB_ME = {
    "id": "10153",
    "name": "Ada Byron Lovelace",
    "last_name": "Lovelace",
    "first_name": "Ada",
    "middle_name": "Byron",
    "gender": "female",
    "email": "ada@example.com",
}


class VerifyRecorder:
    """verify callback that records its arguments and returns a canned result."""

    def __init__(self, result: Any = None, exc: Exception | None = None):
        self.result = result
        self.exc = exc
        self.calls: List[tuple] = []

    def __call__(self, *args):
        self.calls.append(args)
        if self.exc is not None:
            raise self.exc
        return self.result


# ---------- Fixtures ----------
@pytest.fixture
def fb_me() -> Dict[str, Any]:
    return dict(FB_ME)


@pytest.fixture
def options() -> StrategyOptions:
    return StrategyOptions(client_id=CLIENT_ID, client_secret=CLIENT_SECRET)


@pytest.fixture
def make_strategy(options):
    def _make(verify=None, **overrides) -> FacebookTokenStrategy:
        opts = StrategyOptions(**{**options.model_dump(), **overrides}) if overrides else options
        return FacebookTokenStrategy(opts, verify or VerifyRecorder(result={"id": "u1"}))
    return _make


@pytest.fixture
def bearer_view():
    def _view(token: str) -> RequestView:
        return RequestView(headers={"authorization": f"Bearer {token}"})
    return _view


@pytest.fixture
def recorder():
    """Factory for VerifyRecorder callbacks."""
    return VerifyRecorder

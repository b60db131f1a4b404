# src/facebook_token_backend/app/core/logging.py
from __future__ import annotations
import logging
import os
from typing import Optional

from facebook_token_backend.app.core.trace import trace_enabled

AUTH_LOGGER = "facebook_token.auth"

# httpx logs every request line at INFO, and the Graph API URL carries the
# user's access_token as a query parameter.
_TOKEN_BEARING_LOGGERS = ("httpx", "httpcore")

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)-8s %(name)s %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def _parse_level(raw: Optional[str], fallback: int) -> int:
    name = (raw or "").strip().upper()
    if not name:
        return fallback
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else fallback


def setup_logging() -> None:
    """
    Configure logging for the token backend. Safe to call more than once.

    LOG_LEVEL       root verbosity (default INFO)
    AUTH_LOG_LEVEL  level of the `facebook_token.auth` logger (default: root level,
                    lowered to INFO when AUTH_TRACE is on so traces are not dropped)
    """
    root = logging.getLogger()
    root_level = _parse_level(os.getenv("LOG_LEVEL"), logging.INFO)
    root.setLevel(root_level)

    # host (pytest, uvicorn, gunicorn) may already own the handlers
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        root.addHandler(handler)

    auth_level = _parse_level(os.getenv("AUTH_LOG_LEVEL"), root_level)
    if trace_enabled():
        auth_level = min(auth_level, logging.INFO)
    logging.getLogger(AUTH_LOGGER).setLevel(auth_level)

    for name in _TOKEN_BEARING_LOGGERS:
        logging.getLogger(name).setLevel(max(root_level, logging.WARNING))

# src/facebook_token_backend/app/auth/outcome.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Union


@dataclass(frozen=True)
class Success:
    user: Any
    info: Optional[Any] = None


@dataclass(frozen=True)
class Failure:
    info: Optional[Any] = None

    @property
    def message(self) -> str:
        if isinstance(self.info, dict):
            return str(self.info.get("message") or "Unauthorized")
        return str(self.info) if self.info else "Unauthorized"


@dataclass(frozen=True)
class Error:
    cause: BaseException


AuthOutcome = Union[Success, Failure, Error]

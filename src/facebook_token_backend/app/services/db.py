# src/facebook_token_backend/app/services/db.py
# In-process user store. Swap for a real database in deployment.
from __future__ import annotations

from typing import Any, Dict

db: Dict[str, Dict[str, Any]] = {"users": {}}

def reset() -> None:
    db["users"].clear()

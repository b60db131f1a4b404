# Maps a normalized Facebook profile -> local user. JIT-provisions if first time.
from __future__ import annotations

from typing import Any, Dict, Optional

from facebook_token_backend.app.auth.profile import Profile

def map_facebook_profile_to_user(dbh, profile: Profile) -> Optional[Dict[str, Any]]:
    """
    Returns a local user dict {id, email, display_name, photo}. Creates it if not found.
    Uses a stable synthetic id: "<provider>:<id>". Returns None for a profile without an id.
    """
    if not profile.id:
        return None

    user_id = f"{profile.provider}:{profile.id}"
    email = profile.emails[0].value or None
    photo = profile.photos[0].value or None

    users = dbh["users"]
    if user_id not in users:
        users[user_id] = {
            "id": user_id,
            "email": email,
            "display_name": profile.display_name,
            "photo": photo,
        }
    else:
        # refresh whatever the provider returned this time
        if email:
            users[user_id]["email"] = email
        if profile.display_name:
            users[user_id]["display_name"] = profile.display_name
        users[user_id]["photo"] = photo
    return users[user_id]

from facebook_token_backend.app.auth.profile import normalize_profile
from facebook_token_backend.app.services.identity import map_facebook_profile_to_user


def test_creates_then_refreshes_user(fb_me):
    dbh = {"users": {}}
    user = map_facebook_profile_to_user(dbh, normalize_profile(fb_me))
    assert user["id"] == "facebook:10153"
    assert user["email"] == "ada@example.com"
    assert user["photo"].endswith("/10153/picture?type=large")

    again = map_facebook_profile_to_user(dbh, normalize_profile({"id": "10153"}))
    assert again is user
    # empty email/name from provider does not wipe stored values
    assert again["email"] == "ada@example.com"
    assert again["display_name"] == "Ada Byron Lovelace"


def test_profile_without_id_maps_to_none():
    assert map_facebook_profile_to_user({"users": {}}, normalize_profile({})) is None

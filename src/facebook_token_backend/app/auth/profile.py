# src/facebook_token_backend/app/auth/profile.py
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

PROVIDER = "facebook"
PICTURE_URL_TEMPLATE = "https://graph.facebook.com/{id}/picture"

# Abstract profile field -> Graph API field(s)
FieldMap = Mapping[str, Union[str, Tuple[str, ...]]]

FIELD_MAP: FieldMap = MappingProxyType({
    "id": "id",
    "displayName": "name",
    "name": ("last_name", "first_name", "middle_name"),
    "gender": "gender",
    "profileUrl": "link",
    "emails": "email",
    "photos": "picture",
})


# ------------------------
# Models
# ------------------------
class ProfileImage(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: Optional[int] = None
    height: Optional[int] = None


class ProfileName(BaseModel):
    family_name: str = ""
    given_name: str = ""
    middle_name: str = ""


class ProfileValue(BaseModel):
    value: str = ""


class Profile(BaseModel):
    """
    Normalized Facebook profile.

    Every optional field is always present (empty string / one-element list),
    so callers never need presence checks.
    """
    provider: str = PROVIDER
    id: str = ""
    display_name: str = ""
    name: ProfileName = Field(default_factory=ProfileName)
    gender: str = ""
    emails: List[ProfileValue] = Field(default_factory=lambda: [ProfileValue()])
    photos: List[ProfileValue] = Field(default_factory=lambda: [ProfileValue()])
    raw: str = ""
    json_data: Dict[str, Any] = Field(default_factory=dict)

    def to_passport(self) -> Dict[str, Any]:
        """camelCase shape used by passport-style consumers."""
        return {
            "provider": self.provider,
            "id": self.id,
            "displayName": self.display_name,
            "name": {
                "familyName": self.name.family_name,
                "givenName": self.name.given_name,
                "middleName": self.name.middle_name,
            },
            "gender": self.gender,
            "emails": [{"value": e.value} for e in self.emails],
            "photos": [{"value": p.value} for p in self.photos],
            "_raw": self.raw,
            "_json": self.json_data,
        }


# ------------------------
# Field mapping
# ------------------------
def convert_profile_fields(
    fields: Optional[Sequence[str]],
    field_map: FieldMap = FIELD_MAP,
) -> str:
    """
    Turn abstract profile fields into the Graph API `fields` value.

      convert_profile_fields(["id", "name", "gender"])
        -> "id,last_name,first_name,middle_name,gender"

    Unknown fields pass through unchanged. No deduplication.
    """
    out: List[str] = []
    for field in fields or ():
        mapped = field_map.get(field) or field
        if isinstance(mapped, str):
            out.append(mapped)
        else:
            out.extend(mapped)
    return ",".join(out)


# ------------------------
# Normalization
# ------------------------
def _text(value: Any) -> str:
    return str(value) if value else ""

def picture_url(profile_id: str, image: Optional[ProfileImage] = None) -> str:
    """
    width first, then height (joined by '&'); type=large only when neither is set.
    """
    image = image or ProfileImage()
    query = ""
    if image.width:
        query = f"width={image.width}"
    if image.height:
        query = f"{query}&height={image.height}" if query else f"height={image.height}"
    return f"{PICTURE_URL_TEMPLATE.format(id=profile_id)}?{query or 'type=large'}"

def normalize_profile(
    data: Mapping[str, Any],
    image: Optional[ProfileImage] = None,
    raw: Optional[str] = None,
) -> Profile:
    """Map a raw Graph API `/me` document onto `Profile`. Pure; never raises on missing keys."""
    profile_id = _text(data.get("id"))
    return Profile(
        id=profile_id,
        display_name=_text(data.get("name")),
        name=ProfileName(
            family_name=_text(data.get("last_name")),
            given_name=_text(data.get("first_name")),
            middle_name=_text(data.get("middle_name")),
        ),
        gender=_text(data.get("gender")),
        emails=[ProfileValue(value=_text(data.get("email")))],
        photos=[ProfileValue(value=picture_url(profile_id, image))],
        raw=raw if raw is not None else "",
        json_data=dict(data),
    )

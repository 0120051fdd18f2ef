"""Instagram user model."""

from typing import Any, ClassVar, Optional, Tuple

from pydantic import Field, StrictStr, model_validator

from instagram_client.core.models.base import InstagramModel, string_or_default


class User(InstagramModel):
    """An Instagram account."""

    required_keys: ClassVar[Tuple[str, ...]] = (
        "id",
        "full_name",
        "profile_picture",
        "username",
    )

    username: StrictStr = Field("", description="Instagram username")
    full_name: StrictStr = Field("", description="Display name")
    profile_picture: StrictStr = Field("", description="Profile picture URL")
    bio: str = Field("", description="Profile biography")
    website: Optional[str] = Field(None, description="Website listed on the profile")

    @model_validator(mode="before")
    @classmethod
    def _normalize_optional_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        values = dict(data)
        if "bio" in values:
            values["bio"] = string_or_default(values["bio"])
        if "website" in values:
            values["website"] = string_or_default(values["website"], None)
        return values

"""Caption attached to a media object."""

from typing import Any, Optional

from pydantic import Field, model_validator

from instagram_client.core.models.base import (
    InstagramModel,
    decode_optional,
    string_or_default,
)
from instagram_client.core.models.user import User


class Caption(InstagramModel):
    from_user: Optional[User] = Field(None, description="Caption author")
    text: str = Field("", description="Caption text")

    @model_validator(mode="before")
    @classmethod
    def _unpack_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        values = dict(data)
        if "from" in values:
            values["from_user"] = decode_optional(User, values.pop("from"))
        if "text" in values:
            values["text"] = string_or_default(values["text"])
        return values

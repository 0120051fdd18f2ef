"""Comment made by a user on a media object."""

from typing import Any, Optional

from pydantic import Field, model_validator

from instagram_client.core.models.base import (
    InstagramModel,
    decode_optional,
    string_or_default,
)
from instagram_client.core.models.user import User


class Comment(InstagramModel):
    """A comment on a media object."""

    from_user: Optional[User] = Field(None, description="Comment author")
    created_time: str = Field("", description="Unix timestamp, as sent by the API")
    text: str = Field("", description="Comment text")

    @model_validator(mode="before")
    @classmethod
    def _unpack_payload(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        values = dict(data)
        if "from" in values:
            values["from_user"] = decode_optional(User, values.pop("from"))
        if "created_time" in values:
            created_time = values["created_time"]
            if isinstance(created_time, int) and not isinstance(created_time, bool):
                created_time = str(created_time)
            values["created_time"] = string_or_default(created_time)
        if "text" in values:
            values["text"] = string_or_default(values["text"])
        return values

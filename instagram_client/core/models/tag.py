"""Hashtag model."""

from typing import Any

from pydantic import Field, model_validator

from instagram_client.core.models.base import InstagramModel, string_or_default


class Tag(InstagramModel):
    """A tag on a media object, usable to search for other media."""

    name: str = Field("", description="Tag name without the leading '#'")

    @classmethod
    def from_name(cls, name: str) -> "Tag":
        return cls(id=name, name=name)

    @property
    def path_name(self) -> str:
        return self.name or self.id

    @model_validator(mode="before")
    @classmethod
    def _normalize_name(cls, data: Any) -> Any:
        if isinstance(data, dict) and "name" in data:
            data = {**data, "name": string_or_default(data["name"])}
        return data

"""Location in the Instagram graph."""

from typing import Any, Optional

from pydantic import Field, model_validator

from instagram_client.core.models.base import InstagramModel, string_or_default


class Location(InstagramModel):
    name: Optional[str] = Field(None, description="Place name")
    latitude: Optional[float] = Field(None, description="Latitude")
    longitude: Optional[float] = Field(None, description="Longitude")

    @model_validator(mode="before")
    @classmethod
    def _normalize_optional_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        values = dict(data)
        if "name" in values:
            values["name"] = string_or_default(values["name"], None)
        for key in ("latitude", "longitude"):
            value = values.get(key)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                values[key] = None
        return values

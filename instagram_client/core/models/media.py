"""Media (image or video) model."""

from enum import Enum
from typing import Any, ClassVar, Optional, Tuple

from pydantic import Field, StrictStr, model_validator

from instagram_client.core.models.base import (
    InstagramModel,
    decode_list,
    decode_optional,
)
from instagram_client.core.models.caption import Caption
from instagram_client.core.models.comment import Comment
from instagram_client.core.models.location import Location
from instagram_client.core.models.tag import Tag
from instagram_client.core.models.user import User


class MediaType(str, Enum):
    IMAGE = "image"
    VIDEO = "video"


def _standard_resolution_url(images: Any) -> Optional[str]:
    if not isinstance(images, dict):
        return None
    standard = images.get("standard_resolution")
    if not isinstance(standard, dict):
        return None
    url = standard.get("url")
    return url if isinstance(url, str) else None


def _decode_tags(value: Any) -> Tuple[Tag, ...]:
    # The API sends bare tag names; objects are accepted as well
    if not isinstance(value, (list, tuple)):
        return ()
    tags = []
    for item in value:
        if isinstance(item, str):
            if item:
                tags.append(Tag.from_name(item))
            continue
        tag = Tag.from_data(item)
        if tag is not None:
            tags.append(tag)
    return tuple(tags)


class Media(InstagramModel):
    """An Instagram media object, either an image or a video."""

    required_keys: ClassVar[Tuple[str, ...]] = ("id", "type", "link")

    type: MediaType = Field(MediaType.IMAGE, description="Image or video")
    link: StrictStr = Field("", description="Permalink on instagram.com")
    standard_resolution_url: str = Field(
        "", description="URL of the standard resolution image"
    )
    comments: Tuple[Comment, ...] = Field(default_factory=tuple)
    caption: Optional[Caption] = None
    location: Optional[Location] = None
    tags: Tuple[Tag, ...] = Field(default_factory=tuple)
    user: Optional[User] = None

    @model_validator(mode="before")
    @classmethod
    def _unpack_payload(cls, data: Any) -> Any:
        """Flatten the nested API representation into model fields."""
        if not isinstance(data, dict):
            return data
        values = dict(data)

        if "images" in values:
            url = _standard_resolution_url(values.pop("images"))
            if url is not None and "standard_resolution_url" not in values:
                values["standard_resolution_url"] = url

        if "comments" in values:
            comments = values["comments"]
            # {"count": n, "data": [...]}
            if isinstance(comments, dict):
                comments = comments.get("data")
            elif isinstance(comments, tuple):
                comments = list(comments)
            values["comments"] = tuple(decode_list(Comment, comments) or ())

        if "tags" in values:
            values["tags"] = _decode_tags(values["tags"])

        for key, model in (("caption", Caption), ("location", Location), ("user", User)):
            if key in values:
                values[key] = decode_optional(model, values[key])

        return values

    @property
    def is_video(self) -> bool:
        return self.type is MediaType.VIDEO

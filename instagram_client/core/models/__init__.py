"""Models decoded from Instagram API payloads."""

from instagram_client.core.models.base import (
    InstagramModel,
    JSONValue,
    decode_list,
)
from instagram_client.core.models.caption import Caption
from instagram_client.core.models.comment import Comment
from instagram_client.core.models.like import Like
from instagram_client.core.models.location import Location
from instagram_client.core.models.media import Media, MediaType
from instagram_client.core.models.relationship import Relationship, RelationshipAction
from instagram_client.core.models.tag import Tag
from instagram_client.core.models.user import User

__all__ = [
    "InstagramModel",
    "JSONValue",
    "decode_list",
    "User",
    "Relationship",
    "RelationshipAction",
    "Media",
    "MediaType",
    "Caption",
    "Comment",
    "Like",
    "Tag",
    "Location",
]

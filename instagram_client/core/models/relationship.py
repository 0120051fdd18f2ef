"""Relationship between the authenticated user and another user."""

from enum import Enum
from typing import ClassVar, Tuple

from pydantic import Field, StrictStr

from instagram_client.core.models.base import InstagramModel


class RelationshipAction(str, Enum):
    """Actions accepted when updating a relationship."""

    FOLLOW = "follow"
    UNFOLLOW = "unfollow"
    APPROVE = "approve"
    IGNORE = "ignore"


class Relationship(InstagramModel):
    """Follow status in both directions, e.g. "follows", "requested", "none"."""

    required_keys: ClassVar[Tuple[str, ...]] = (
        "id",
        "outgoing_status",
        "incoming_status",
    )

    outgoing_status: StrictStr = Field("", description="Our status towards the user")
    incoming_status: StrictStr = Field("", description="The user's status towards us")

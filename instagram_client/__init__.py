"""Async client for the Instagram REST API."""

from instagram_client.core.exceptions import (
    APIError,
    DecodeError,
    EnvelopeError,
    InstagramAPIError,
    MalformedURLError,
    NotAuthenticatedError,
    ProtocolError,
    TransportError,
    UnsupportedMethodError,
)
from instagram_client.core.models import (
    Caption,
    Comment,
    Like,
    Location,
    Media,
    MediaType,
    Relationship,
    RelationshipAction,
    Tag,
    User,
)
from instagram_client.core.services.instagram_api_service import (
    HTTPMethod,
    InstagramAPIService,
)

__version__ = "0.1.0"

__all__ = [
    "InstagramAPIService",
    "HTTPMethod",
    "InstagramAPIError",
    "NotAuthenticatedError",
    "MalformedURLError",
    "TransportError",
    "UnsupportedMethodError",
    "ProtocolError",
    "EnvelopeError",
    "APIError",
    "DecodeError",
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

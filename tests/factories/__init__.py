"""Factories for generating Instagram API payloads."""

from typing import Any, Dict, Optional

from factory import Factory, Faker, LazyAttribute, Sequence


def envelope(data: Any = None, code: int = 200, **meta: Any) -> Dict[str, Any]:
    """Wrap a payload the way the API does."""
    return {"meta": {"code": code, **meta}, "data": data}


def error_envelope(
    code: int = 400,
    error_type: str = "APINotFoundError",
    error_message: Optional[str] = "this resource does not exist",
) -> Dict[str, Any]:
    return envelope(None, code=code, error_type=error_type, error_message=error_message)


class UserPayloadFactory(Factory):
    """Factory for user objects as returned by /users endpoints."""

    class Meta:
        model = dict

    id = Sequence(lambda n: str(1000 + n))
    username = Faker("user_name")
    full_name = Faker("name")
    profile_picture = LazyAttribute(
        lambda o: f"https://scontent.cdninstagram.com/{o.username}.jpg"
    )
    bio = Faker("sentence")
    website = Faker("url")


class RelationshipPayloadFactory(Factory):
    class Meta:
        model = dict

    id = Sequence(lambda n: str(2000 + n))
    outgoing_status = "follows"
    incoming_status = "none"


class CommentPayloadFactory(Factory):
    class Meta:
        model = dict

    id = Sequence(lambda n: str(3000 + n))
    created_time = "1280780324"
    text = Faker("sentence")


class TagPayloadFactory(Factory):
    class Meta:
        model = dict

    id = Sequence(lambda n: str(4000 + n))
    name = Faker("word")


class LocationPayloadFactory(Factory):
    class Meta:
        model = dict

    id = Sequence(lambda n: str(5000 + n))
    name = Faker("city")
    latitude = 48.8584
    longitude = 2.2945


class MediaPayloadFactory(Factory):
    """Factory for media objects, including the nested images block."""

    class Meta:
        model = dict

    id = Sequence(lambda n: f"{6000 + n}_1000")
    type = "image"
    link = LazyAttribute(lambda o: f"https://www.instagram.com/p/{o.id}/")
    images = LazyAttribute(
        lambda o: {
            "low_resolution": {"url": f"https://scontent.cdninstagram.com/{o.id}_l.jpg"},
            "standard_resolution": {
                "url": f"https://scontent.cdninstagram.com/{o.id}_s.jpg",
                "width": 640,
                "height": 640,
            },
        }
    )
    tags = ["nofilter", "sunset"]

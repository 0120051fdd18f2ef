"""Base class and decoding helpers for Instagram API models."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from instagram_client.core.exceptions import DecodeError

logger = logging.getLogger(__name__)

# Decoded JSON as produced by the response parser
JSONValue = Union[None, bool, int, float, str, List["JSONValue"], Dict[str, "JSONValue"]]

ModelT = TypeVar("ModelT", bound="InstagramModel")


class InstagramModel(BaseModel):
    """
    Immutable record decoded from an Instagram API payload.

    Subclasses list the payload keys that must be present in
    ``required_keys``. Every other field has a default, so a placeholder can
    be built locally from an id alone, e.g. ``User(id="42")``.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    required_keys: ClassVar[Tuple[str, ...]] = ("id",)

    id: StrictStr = Field(..., min_length=1, description="Instagram object ID")

    @classmethod
    def decode(cls: Type[ModelT], data: Any) -> ModelT:
        """
        Build an instance from a decoded JSON object.

        Raises:
            DecodeError: if data is not an object, a required key is absent,
                or a field has the wrong type
        """
        if isinstance(data, cls):
            return data
        if not isinstance(data, dict):
            raise DecodeError(
                f"{cls.__name__} payload must be an object, got {type(data).__name__}"
            )

        missing = [key for key in cls.required_keys if key not in data]
        if missing:
            raise DecodeError(
                f"{cls.__name__} payload missing required fields: {', '.join(missing)}"
            )

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise DecodeError(
                f"Invalid {cls.__name__} payload ({e.error_count()} error(s)): {e}"
            ) from e

    @classmethod
    def from_data(cls: Type[ModelT], data: Any) -> Optional[ModelT]:
        """Same as decode, but returns None instead of raising."""
        try:
            return cls.decode(data)
        except DecodeError as e:
            logger.debug(f"Skipping {cls.__name__}: {e}")
            return None


def decode_list(model: Type[ModelT], data: Any) -> Optional[List[ModelT]]:
    """
    Decode a JSON array into model instances.

    Elements that fail to decode are skipped; order is preserved.
    Returns None when data is not an array.
    """
    if not isinstance(data, list):
        return None

    objects = []
    for item in data:
        obj = model.from_data(item)
        if obj is not None:
            objects.append(obj)

    if len(objects) < len(data):
        logger.debug(
            f"Decoded {len(objects)} of {len(data)} {model.__name__} objects"
        )
    return objects


def decode_optional(model: Type[ModelT], data: Any) -> Optional[ModelT]:
    if data is None:
        return None
    return model.from_data(data)


def string_or_default(value: Any, default: Optional[str] = "") -> Optional[str]:
    if isinstance(value, str):
        return value
    return default

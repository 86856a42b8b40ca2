"""
Shared pydantic bases for API schemas.

The client speaks camelCase JSON (``fullName``, ``minPrice``); Python code
uses snake_case attributes. Both spellings are accepted on input and
responses are serialized with the camelCase aliases.
"""

from datetime import datetime, timezone
from typing import Annotated, Any, ClassVar, Dict, FrozenSet, Optional
from pydantic import AfterValidator, AnyHttpUrl, BaseModel, TypeAdapter
from pydantic.alias_generators import to_camel

_http_url = TypeAdapter(AnyHttpUrl)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive timestamps (SQLite drops the offset) as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]


def validate_http_url(value: Optional[str]) -> Optional[str]:
    """Check that ``value`` is an http(s) URL; empty strings count as absent."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        _http_url.validate_python(value)
    except ValueError:
        raise ValueError("Please enter a valid URL")
    return value


class CamelModel(BaseModel):
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class UpdateModel(CamelModel):
    """
    Base for partial updates.

    Only fields present in the request are changed. An explicit null is
    ignored unless the field is listed in ``nullable_fields``.
    """
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    def changes(self) -> Dict[str, Any]:
        data = self.model_dump(exclude_unset=True)
        return {
            key: value for key, value in data.items()
            if value is not None or key in self.nullable_fields
        }


class MessageResponse(BaseModel):
    message: str

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel
from typing import ClassVar, Optional, Tuple
from datetime import datetime, timezone


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python; both accepted as input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PartialUpdate(ApiModel):
    """
    Base for PATCH bodies. Every field is optional, but fields listed in
    ``non_nullable`` may not be sent as an explicit null.
    """
    non_nullable: ClassVar[Tuple[str, ...]] = ()

    @model_validator(mode="after")
    def reject_nulls(self):
        for field in self.non_nullable:
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{to_camel(field)} cannot be null")
        return self

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MessageResponse(BaseModel):
    message: str


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored naive in UTC; convert aware inputs on the way in."""
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def strip_text(value):
    """Trim raw string input so length constraints see the trimmed value."""
    return value.strip() if isinstance(value, str) else value


def blank_to_none(value):
    """Trim raw string input; whitespace-only becomes null."""
    if isinstance(value, str):
        return value.strip() or None
    return value

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel as PydanticBaseModel
from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    return datetime.now(UTC)


class AppBaseModel(PydanticBaseModel):
    """Base model for all domain models.

    Attributes are snake_case in Python and camelCase on the wire and in the
    key-value store; both spellings are accepted on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )

    def to_document(self) -> dict:
        """Serialize to the JSON document stored under a key."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TimestampedModel(AppBaseModel):
    """Base model with timestamp fields."""

    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime | None = None

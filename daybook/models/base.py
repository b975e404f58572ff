"""
Shared model configuration.

Stored JSON keeps the camelCase field names the data has always had
(``createdAt``, ``updatedAt``); Python code uses snake_case attributes.
"""

from datetime import datetime, timezone
from uuid import uuid4

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def new_id() -> str:
    """Opaque unique identifier for a new record."""
    return str(uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StoredModel(BaseModel):
    """Base for every record persisted to storage."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_storage(self) -> dict:
        """JSON-compatible dict using the stored (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)

"""
Note Model

Free-form notes, kept newest-first. A note's ``created_at`` never
changes; every edit refreshes ``updated_at``.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field, field_validator, model_validator

from daybook.models.base import StoredModel, new_id, utcnow


class Note(StoredModel):
    """A single free-text note."""

    id: str = Field(
        default_factory=new_id,
        min_length=1,
        description="Opaque unique identifier"
    )
    title: str = Field(
        default="",
        description="Note title (may be empty)"
    )
    content: str = Field(
        default="",
        description="Note body (may be empty)"
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        description="When the note was created"
    )
    updated_at: datetime = Field(
        default_factory=utcnow,
        description="Last edit timestamp"
    )

    @field_validator('created_at', 'updated_at')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Timestamps without an offset are taken as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @model_validator(mode='after')
    def validate_timestamps(self) -> 'Note':
        if self.updated_at < self.created_at:
            raise ValueError("Note updated before it was created")
        return self

    @classmethod
    def new(cls) -> 'Note':
        """Create an empty note stamped with the current time."""
        now = utcnow()
        return cls(created_at=now, updated_at=now)

    def edit(
        self,
        title: Optional[str] = None,
        content: Optional[str] = None,
    ) -> 'Note':
        """
        Return a copy with the given fields replaced.

        ``updated_at`` is always refreshed, even if nothing changed,
        the same way any keystroke in the editor counts as an edit.
        """
        changes: dict = {"updated_at": max(utcnow(), self.created_at)}
        if title is not None:
            changes["title"] = title
        if content is not None:
            changes["content"] = content
        return self.model_copy(update=changes)

    @property
    def display_title(self) -> str:
        return self.title.strip() or "Sem título"

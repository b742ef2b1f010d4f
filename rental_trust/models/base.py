"""
Base record type for the persisted rows the services operate on.
Includes common fields: id, created_at, updated_at.
"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
import uuid


def utcnow() -> datetime:
    """Timezone-aware current UTC time."""
    return datetime.now(timezone.utc)


class Record(BaseModel):
    """
    Base class for all domain records.
    Records are plain values: services return updated copies instead of mutating them.
    """

    model_config = ConfigDict(from_attributes=True, use_enum_values=False)

    id: uuid.UUID = Field(default_factory=uuid.uuid4)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def touch(self, **changes) -> "Record":
        """Return a copy with changes applied and updated_at refreshed."""
        changes.setdefault("updated_at", utcnow())
        return self.model_copy(update=changes)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"

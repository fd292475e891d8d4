"""Event model - the envelope shared by every kind of history entry."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from deploylog.models.enums import EventType, LogLevel
from deploylog.models.payloads import (
    AutoReleasePayload,
    CommitPayload,
    ReleasePayload,
    SyncPayload,
    UnknownPayload,
)

# Timestamp of records written without one
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

PAYLOAD_CLASSES = (
    CommitPayload,
    SyncPayload,
    ReleasePayload,
    AutoReleasePayload,
    UnknownPayload,
)


class Event(BaseModel):
    """A timestamped entry in the deployment history."""

    model_config = ConfigDict(populate_by_name=True)

    # Assigned by the store on first save; 0 until then
    id: int = 0

    # Services affected by this event (a set; order carries no meaning)
    service_ids: list[str] = Field(default_factory=list, alias="serviceIDs")

    # Event tag, see EventType. Unrecognised tags are kept as-is.
    type: str

    # For instantaneous events these are equal; a missing endedAt means
    # the event was instantaneous
    started_at: datetime = Field(default=ZERO_TIME, alias="startedAt")
    ended_at: Optional[datetime] = Field(default=None, alias="endedAt")

    log_level: LogLevel = Field(default=LogLevel.INFO, alias="logLevel")

    # Pre-formatted text from before structured rendering existed.
    # Takes precedence over the metadata when set.
    message: str = ""

    # Tag-specific payload, None if the event carried none
    metadata: Any = None

    @field_validator("service_ids", "message", mode="before")
    @classmethod
    def null_as_empty(cls, v: Any, info) -> Any:
        if v is None:
            return [] if info.field_name == "service_ids" else ""
        return v

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        if isinstance(v, Enum):
            return v.value
        return v

    @field_validator("type")
    @classmethod
    def validate_type(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("event type is empty")
        return v

    @field_validator("metadata")
    @classmethod
    def validate_metadata(cls, v: Any) -> Any:
        """Only decoded payloads are carried; raw documents go through the decoder."""
        if v is not None and not isinstance(v, PAYLOAD_CLASSES):
            raise ValueError(
                f"metadata must be a decoded payload, got {type(v).__name__}; "
                "use deploylog.decode_event for raw documents"
            )
        return v

    @model_validator(mode="after")
    def check_invariants(self) -> "Event":
        if self.ended_at is None:
            self.ended_at = self.started_at
        if (self.started_at.tzinfo is None) != (self.ended_at.tzinfo is None):
            raise ValueError("startedAt and endedAt must both be timezone-aware or both naive")
        if self.ended_at < self.started_at:
            raise ValueError(
                f"endedAt ({self.ended_at.isoformat()}) is before "
                f"startedAt ({self.started_at.isoformat()})"
            )

        if self.metadata is not None:
            tag = EventType.lookup(self.type)
            if isinstance(self.metadata, UnknownPayload):
                if tag in EventType.typed():
                    raise ValueError(f"{self.type} event carries untyped metadata")
            elif self.metadata.event_type != tag:
                raise ValueError(
                    f"{self.metadata.event_type.value} metadata on a {self.type} event"
                )
        return self

    @classmethod
    def instant(
        cls,
        type: EventType | str,
        service_ids: Iterable[str] = (),
        *,
        log_level: LogLevel = LogLevel.INFO,
        message: str = "",
        metadata: Optional[Any] = None,
    ) -> "Event":
        """Create an unsaved event that starts and ends now."""
        now = datetime.now(timezone.utc)
        return cls(
            type=type,
            service_ids=list(service_ids),
            started_at=now,
            ended_at=now,
            log_level=log_level,
            message=message,
            metadata=metadata,
        )

    @property
    def is_persisted(self) -> bool:
        """Check if the store has assigned an ID."""
        return self.id != 0

    def service_id_strings(self) -> list[str]:
        """Return affected services sorted and without duplicates."""
        return sorted(set(self.service_ids))

    def __str__(self) -> str:
        from deploylog.rendering import render_event

        return render_event(self)

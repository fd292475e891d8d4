"""Event payloads, one model per typed event tag.

The envelope's ``type`` selects which of these a ``metadata`` document is
decoded into. Each variant reports its own tag through ``event_type`` so the
envelope can check the two agree.
"""

from typing import Any, ClassVar, Optional, Union

from pydantic import Field, RootModel

from deploylog.models.domain import (
    Automated,
    Cause,
    ReleaseSpec,
    Result,
    Spec,
    WireModel,
    wire_field,
)
from deploylog.models.enums import EventType

SHORT_REVISION_LENGTH = 7


def short_revision(revision: str) -> str:
    """Return the display form of a revision (its first seven characters)."""
    return revision[:SHORT_REVISION_LENGTH]


class CommitPayload(WireModel):
    """New git commit created by the daemon."""

    event_type: ClassVar[EventType] = EventType.COMMIT

    revision: str = ""
    spec: Optional[Spec] = None
    result: Result = Field(default_factory=Result)

    def short_revision(self) -> str:
        return short_revision(self.revision)


class Commit(WireModel):
    """Commit summary carried by a sync event."""

    revision: str = ""
    message: str = ""


class SyncPayload(WireModel):
    """One or more commits applied to the cluster."""

    event_type: ClassVar[EventType] = EventType.SYNC

    # Deprecated: records written before commit messages were kept.
    # Upgraded into ``commits`` on decode.
    revisions: list[str] = Field(default_factory=list)
    commits: list[Commit] = Field(default_factory=list)
    # Which kinds of commit are included: release, autorelease, policy, other
    includes: dict[str, bool] = Field(default_factory=dict)
    # True if there is no record of having synced before
    initial_sync: bool = wire_field("initialSync", "InitialSync", default=False)


class ReleaseEventCommon(WireModel):
    """Members shared by manual and automated releases."""

    # Revision holding the release's changes
    revision: str = wire_field("revision", "Revision", default="")
    result: Result = Field(default_factory=Result)
    # Error message, if the release failed
    error: Optional[str] = None


class ReleasePayload(ReleaseEventCommon):
    """Service(s) released on request."""

    event_type: ClassVar[EventType] = EventType.RELEASE

    spec: ReleaseSpec = Field(default_factory=ReleaseSpec)
    cause: Cause = Field(default_factory=Cause)


class AutoReleasePayload(ReleaseEventCommon):
    """Service(s) released automatically because of new images."""

    event_type: ClassVar[EventType] = EventType.AUTO_RELEASE

    spec: Automated = Field(default_factory=Automated)


class UnknownPayload(RootModel[dict[str, Any]]):
    """Metadata of an event type this version does not model."""

    event_type: ClassVar[EventType] = EventType.UNKNOWN

    root: dict[str, Any] = Field(default_factory=dict)


EventPayload = Union[
    CommitPayload,
    SyncPayload,
    ReleasePayload,
    AutoReleasePayload,
    UnknownPayload,
]

PAYLOAD_TYPES: dict[EventType, type[WireModel]] = {
    EventType.COMMIT: CommitPayload,
    EventType.SYNC: SyncPayload,
    EventType.RELEASE: ReleasePayload,
    EventType.AUTO_RELEASE: AutoReleasePayload,
}

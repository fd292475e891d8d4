"""deploylog data models."""

from deploylog.models.enums import EventType, LogLevel
from deploylog.models.domain import (
    SERVICE_SPEC_ALL,
    Automated,
    Cause,
    Change,
    ContainerUpdate,
    ReleaseSpec,
    Result,
    ServiceResult,
    Spec,
)
from deploylog.models.payloads import (
    PAYLOAD_TYPES,
    AutoReleasePayload,
    Commit,
    CommitPayload,
    EventPayload,
    ReleaseEventCommon,
    ReleasePayload,
    SyncPayload,
    UnknownPayload,
    short_revision,
)
from deploylog.models.event import Event

__all__ = [
    "PAYLOAD_TYPES",
    "SERVICE_SPEC_ALL",
    "AutoReleasePayload",
    "Automated",
    "Cause",
    "Change",
    "Commit",
    "CommitPayload",
    "ContainerUpdate",
    "Event",
    "EventPayload",
    "EventType",
    "LogLevel",
    "ReleaseEventCommon",
    "ReleasePayload",
    "ReleaseSpec",
    "Result",
    "ServiceResult",
    "Spec",
    "SyncPayload",
    "UnknownPayload",
    "short_revision",
]

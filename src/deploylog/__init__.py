"""deploylog - audit-log events for deployment history."""

from deploylog.codec import (
    DeployLogError,
    EmptyEventType,
    MalformedEnvelope,
    MalformedPayload,
    PayloadMismatch,
    decode_event,
    decode_events,
    dumps_event,
    encode_event,
)
from deploylog.models import Event, EventType, LogLevel
from deploylog.rendering import render_event

__version__ = "0.1.0"

__all__ = [
    "DeployLogError",
    "EmptyEventType",
    "Event",
    "EventType",
    "LogLevel",
    "MalformedEnvelope",
    "MalformedPayload",
    "PayloadMismatch",
    "decode_event",
    "decode_events",
    "dumps_event",
    "encode_event",
    "render_event",
]

"""deploylog codec - wire format decoding, migration and encoding."""

from deploylog.codec.decoder import decode_event, decode_events, decode_payload
from deploylog.codec.encoder import dumps_event, encode_event, encode_payload
from deploylog.codec.errors import (
    DeployLogError,
    EmptyEventType,
    MalformedEnvelope,
    MalformedPayload,
    PayloadMismatch,
)

__all__ = [
    "DeployLogError",
    "EmptyEventType",
    "MalformedEnvelope",
    "MalformedPayload",
    "PayloadMismatch",
    "decode_event",
    "decode_events",
    "decode_payload",
    "dumps_event",
    "encode_event",
    "encode_payload",
]

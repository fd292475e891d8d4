"""Decoding of stored event documents.

Decoding happens in two phases because the shape of ``metadata`` is only
known once ``type`` has been read from the same document:

1. The envelope is validated with ``metadata`` held back as raw data.
2. The raw metadata is decoded into the payload model registered for the
   tag, then upgraded by that tag's migrations.

Tags this version does not model (including ones written by newer versions)
are not an error: their metadata is kept as an ``UnknownPayload``.
"""

import json
import logging
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from deploylog.codec.errors import EmptyEventType, MalformedEnvelope, MalformedPayload
from deploylog.codec.migrations import apply_migrations
from deploylog.models.enums import EventType
from deploylog.models.event import Event
from deploylog.models.payloads import PAYLOAD_TYPES, EventPayload, UnknownPayload

logger = logging.getLogger(__name__)

RawEvent = Union[Mapping[str, Any], str, bytes]


def describe_validation_error(exc: ValidationError) -> str:
    """Summarise a pydantic error as ``field: problem`` pairs."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<root>"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


def load_document(raw: RawEvent) -> dict[str, Any]:
    """Parse JSON text if needed and check the result is an object."""
    if isinstance(raw, (str, bytes, bytearray)):
        try:
            raw = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedEnvelope(f"Event is not valid JSON: {e}") from e

    if not isinstance(raw, Mapping):
        raise MalformedEnvelope(
            f"Event must be a JSON object, got {type(raw).__name__}"
        )
    return dict(raw)


def decode_payload(event_type: str, raw_metadata: Any) -> Optional[EventPayload]:
    """
    Decode raw metadata into the payload model for ``event_type``.

    Args:
        event_type: The envelope's tag
        raw_metadata: The undecoded ``metadata`` member, None if absent

    Returns:
        The typed payload, an UnknownPayload for unrecognised tags, or None
        when there was no metadata

    Raises:
        MalformedPayload: If the metadata does not fit the tag's model
    """
    # Deliberately not an error for typed tags either: older records that
    # only carry a message must stay readable.
    if raw_metadata is None:
        return None

    tag = EventType.lookup(event_type)
    model = PAYLOAD_TYPES.get(tag)
    if model is None:
        logger.debug(f"No payload model for event type {event_type!r}, keeping metadata untyped")
        model = UnknownPayload

    try:
        payload = model.model_validate(raw_metadata)
    except ValidationError as e:
        raise MalformedPayload(event_type, describe_validation_error(e)) from e

    if tag is not None:
        payload = apply_migrations(tag, payload)
    return payload


def decode_event(raw: RawEvent) -> Event:
    """
    Decode a stored event document.

    Args:
        raw: A mapping, or JSON text, in the wire format

    Returns:
        The event, with ``metadata`` decoded according to its type

    Raises:
        EmptyEventType: If ``type`` is missing or blank
        MalformedEnvelope: If the envelope fields are invalid
        MalformedPayload: If ``metadata`` does not fit the event type
    """
    document = load_document(raw)

    event_type = document.get("type")
    if event_type is None or (isinstance(event_type, str) and not event_type.strip()):
        raise EmptyEventType()

    raw_metadata = document.pop("metadata", None)
    try:
        envelope = Event.model_validate(document)
    except ValidationError as e:
        raise MalformedEnvelope(
            f"Invalid event envelope: {describe_validation_error(e)}"
        ) from e

    payload = decode_payload(envelope.type, raw_metadata)
    return envelope.model_copy(update={"metadata": payload})


def decode_events(raws: Iterable[RawEvent]) -> list[Event]:
    """Decode a sequence of stored event documents, stopping at the first bad one."""
    return [decode_event(raw) for raw in raws]

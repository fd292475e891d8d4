"""Encoding of events back into the stored document format."""

import json
from typing import Any, Optional

from deploylog.models.event import Event
from deploylog.models.payloads import EventPayload, UnknownPayload


def encode_payload(payload: Optional[EventPayload]) -> Any:
    """Serialise a payload with its wire member names.

    Unset optional members are left out, matching how records are written.
    Untyped metadata is emitted exactly as it was read.
    """
    if payload is None:
        return None
    if isinstance(payload, UnknownPayload):
        return payload.model_dump(mode="json")
    return payload.model_dump(mode="json", by_alias=True, exclude_none=True)


def encode_event(event: Event) -> dict[str, Any]:
    """Serialise an event to a JSON-compatible document."""
    document = event.model_dump(mode="json", by_alias=True, exclude={"metadata"})
    if not event.message:
        del document["message"]
    if event.metadata is not None:
        document["metadata"] = encode_payload(event.metadata)
    return document


def dumps_event(event: Event, **kwargs: Any) -> str:
    """Serialise an event to JSON text; ``kwargs`` go to ``json.dumps``."""
    return json.dumps(encode_event(event), **kwargs)

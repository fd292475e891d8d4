"""One-line, human-readable summaries of events."""

import json
from typing import Callable

from deploylog.codec.errors import PayloadMismatch
from deploylog.models.enums import EventType
from deploylog.models.event import Event
from deploylog.models.payloads import (
    AutoReleasePayload,
    CommitPayload,
    ReleasePayload,
    SyncPayload,
    short_revision,
)

NO_SERVICES = "no services"
NO_IMAGE_CHANGES = "no image changes"
ALL_SERVICES = "all services"

# Events that are just a verb applied to the affected services
VERB_EVENTS: dict[EventType, str] = {
    EventType.AUTOMATE: "Automated",
    EventType.DEAUTOMATE: "Deautomated",
    EventType.LOCK: "Locked",
    EventType.UNLOCK: "Unlocked",
    EventType.UPDATE_POLICY: "Updated policies",
}


def _payload(event: Event, expected: type):
    """Return the event's payload, failing if it is not ``expected``."""
    if not isinstance(event.metadata, expected):
        raise PayloadMismatch(
            event.type,
            expected.__name__,
            type(event.metadata).__name__,
        )
    return event.metadata


def _join(items: list[str], empty: str) -> str:
    return ", ".join(items) if items else empty


def _render_release(event: Event) -> str:
    metadata: ReleasePayload = _payload(event, ReleasePayload)
    images = _join(metadata.result.image_ids(), NO_IMAGE_CHANGES)

    services = event.service_id_strings()
    if metadata.spec.is_all_services():
        services = [ALL_SERVICES]

    text = f"Released: {images} to {_join(services, NO_SERVICES)}"
    if metadata.cause.user:
        text += f", by {metadata.cause.user}"
    if metadata.cause.message:
        text += f", with message {json.dumps(metadata.cause.message, ensure_ascii=False)}"
    return text


def _render_auto_release(event: Event) -> str:
    metadata: AutoReleasePayload = _payload(event, AutoReleasePayload)
    return f"Automated release of {_join(metadata.result.image_ids(), NO_IMAGE_CHANGES)}"


def _render_commit(event: Event) -> str:
    metadata: CommitPayload = _payload(event, CommitPayload)
    services = _join(event.service_id_strings(), "<no changes>")
    return f"Commit: {metadata.short_revision()}, {services}"


def sync_revision_range(commits: list) -> str:
    """
    Summarise the revisions of a sync, newest commit first.

    One or two commits show only the newest; more show ``oldest..newest``.
    """
    if not commits:
        return "<no revision>"
    if len(commits) <= 2:
        return short_revision(commits[0].revision)
    last = len(commits) - 1
    return f"{short_revision(commits[last].revision)}..{short_revision(commits[0].revision)}"


def _render_sync(event: Event) -> str:
    metadata: SyncPayload = _payload(event, SyncPayload)
    services = _join(event.service_id_strings(), "no services changed")
    return f"Sync: {sync_revision_range(metadata.commits)}, {services}"


RENDERERS: dict[EventType, Callable[[Event], str]] = {
    EventType.RELEASE: _render_release,
    EventType.AUTO_RELEASE: _render_auto_release,
    EventType.COMMIT: _render_commit,
    EventType.SYNC: _render_sync,
}


def render_event(event: Event) -> str:
    """
    Describe an event in a single line.

    A stored ``message`` is returned as-is. Otherwise the text depends on the
    event type.

    Raises:
        PayloadMismatch: If a release, autorelease, commit or sync event does
            not carry its decoded payload
    """
    if event.message:
        return event.message

    tag = EventType.lookup(event.type)
    renderer = RENDERERS.get(tag)
    if renderer is not None:
        return renderer(event)

    verb = VERB_EVENTS.get(tag)
    if verb is not None:
        return f"{verb}: {_join(event.service_id_strings(), NO_SERVICES)}"

    return f"Unknown event: {event.type}"

"""
Event envelope model: construction and invariants.
"""

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from deploylog import Event, EventType
from deploylog.models import (
    CommitPayload,
    ReleasePayload,
    Result,
    ServiceResult,
    ContainerUpdate,
    SyncPayload,
    UnknownPayload,
    short_revision,
)
from deploylog.models.event import ZERO_TIME

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def test_new_event_is_unsaved():
    """Events start without an ID."""
    event = Event(type="lock", started_at=NOW, ended_at=NOW)

    assert event.id == 0
    assert not event.is_persisted


def test_instant_event():
    """instant() creates an event that starts and ends now."""
    before = datetime.now(timezone.utc)
    event = Event.instant(EventType.LOCK, ["default/app"])

    assert event.type == "lock"
    assert event.started_at == event.ended_at
    assert event.started_at >= before
    assert event.started_at.tzinfo is not None


def test_instant_event_with_payload():
    """instant() accepts a payload for typed events."""
    event = Event.instant("commit", metadata=CommitPayload(revision="abc"))

    assert str(event) == "Commit: abc, <no changes>"


def test_accepts_wire_names():
    """Events can be built from wire member names."""
    event = Event(type="lock", serviceIDs=["default/app"], startedAt=NOW, endedAt=NOW, logLevel="error")

    assert event.service_ids == ["default/app"]
    assert event.log_level.value == "error"


def test_default_times():
    """Events without times start at the zero time and are instantaneous."""
    event = Event(type="lock")

    assert event.started_at == ZERO_TIME
    assert event.ended_at == ZERO_TIME


def test_end_before_start_rejected():
    """endedAt may not precede startedAt."""
    with pytest.raises(ValidationError):
        Event(type="lock", started_at=NOW, ended_at=NOW - timedelta(seconds=1))


def test_mixed_timezones_rejected():
    """Naive and aware times cannot be mixed."""
    with pytest.raises(ValidationError):
        Event(type="lock", started_at=NOW, ended_at=datetime(2024, 5, 2))


def test_blank_type_rejected():
    """The tag is required."""
    with pytest.raises(ValidationError):
        Event(type=" ", started_at=NOW)


def test_raw_metadata_rejected():
    """Raw documents must go through the decoder."""
    with pytest.raises(ValidationError) as exc_info:
        Event(type="commit", started_at=NOW, metadata={"revision": "abc"})

    assert "decode_event" in str(exc_info.value)


def test_payload_tag_must_match():
    """A payload of another event type is rejected."""
    with pytest.raises(ValidationError):
        Event(type="commit", started_at=NOW, metadata=SyncPayload())


def test_untyped_payload_on_typed_tag_rejected():
    """Typed tags cannot carry untyped metadata."""
    with pytest.raises(ValidationError):
        Event(type="release", started_at=NOW, metadata=UnknownPayload({"foo": 1}))


def test_untyped_payload_on_unknown_tag():
    """Any unrecognised tag may carry untyped metadata."""
    event = Event(type="something_new", started_at=NOW, metadata=UnknownPayload({"foo": 1}))

    assert event.metadata.root == {"foo": 1}


def test_service_id_strings_sorted_and_unique():
    """Services are sorted and de-duplicated for display."""
    event = Event(type="lock", service_ids=["b", "a", "b"], started_at=NOW)

    assert event.service_id_strings() == ["a", "b"]
    assert event.service_ids == ["b", "a", "b"], "stored order is kept"


@pytest.mark.parametrize(
    "revision, expected",
    [
        ("0123456789abcdef", "0123456"),
        ("0123456", "0123456"),
        ("abc", "abc"),
        ("", ""),
    ],
)
def test_short_revision(revision, expected):
    """Short revisions are at most seven characters."""
    assert short_revision(revision) == expected
    assert CommitPayload(revision=revision).short_revision() == expected


def test_result_image_ids():
    """Target images are collected across services, sorted, without duplicates."""
    result = Result({
        "default/web": ServiceResult(per_container=[ContainerUpdate(target="web:v2")]),
        "default/app": ServiceResult(per_container=[
            ContainerUpdate(target="app:v1"),
            ContainerUpdate(target="web:v2"),
            ContainerUpdate(container="skipped"),
        ]),
    })

    assert result.image_ids() == ["app:v1", "web:v2"]


def test_payloads_report_their_tag():
    """Every payload model names the tag it belongs to."""
    assert CommitPayload.event_type == EventType.COMMIT
    assert SyncPayload.event_type == EventType.SYNC
    assert ReleasePayload.event_type == EventType.RELEASE
    assert UnknownPayload.event_type == EventType.UNKNOWN
    assert EventType.typed() == {
        EventType.COMMIT,
        EventType.SYNC,
        EventType.RELEASE,
        EventType.AUTO_RELEASE,
    }

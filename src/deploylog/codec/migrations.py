"""Upgrades for payloads persisted in older shapes.

Migrations run after a payload has been decoded into its current model, so an
old record and a new one come out of the decoder looking the same.

Rules:
- Each migration takes and returns a payload of its tag's model.
- Migrations are idempotent: running one over an already-current payload
  changes nothing.
- A tag's chain runs in registration order, oldest shape first.
"""

import logging
from typing import Callable

from deploylog.models.enums import EventType
from deploylog.models.payloads import Commit, SyncPayload

logger = logging.getLogger(__name__)


def upgrade_sync_revisions(payload: SyncPayload) -> SyncPayload:
    """
    Fill ``commits`` from the deprecated ``revisions`` list.

    Sync events used to record bare revisions. Each one becomes a commit with
    an empty message, in the original order. Payloads that already have
    commits are returned unchanged.
    """
    if payload.commits or not payload.revisions:
        return payload

    logger.debug(f"Upgrading {len(payload.revisions)} sync revisions to commits")
    commits = [Commit(revision=rev, message="") for rev in payload.revisions]
    return payload.model_copy(update={"commits": commits})


# Migration registry: maps event types to their upgrade chain
MIGRATIONS: dict[EventType, list[Callable]] = {
    EventType.SYNC: [upgrade_sync_revisions],
}


def get_migrations(event_type: EventType) -> list[Callable]:
    """
    Get the upgrade chain for an event type.

    Returns:
        Migrations in the order they apply; empty if none are registered
    """
    return MIGRATIONS.get(event_type, [])


def apply_migrations(event_type: EventType, payload):
    """Run every registered migration for ``event_type`` over ``payload``."""
    for migration in get_migrations(event_type):
        payload = migration(payload)
    return payload

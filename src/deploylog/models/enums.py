"""deploylog enumerations."""

from enum import Enum


class EventType(str, Enum):
    """Event tag carried in the envelope's ``type`` field."""

    COMMIT = "commit"
    SYNC = "sync"
    RELEASE = "release"
    AUTO_RELEASE = "autorelease"
    AUTOMATE = "automate"
    DEAUTOMATE = "deautomate"
    LOCK = "lock"
    UNLOCK = "unlock"
    UPDATE_POLICY = "update_policy"

    # Labels e.g. commits that are not considered an event in themselves
    OTHER = "other"
    # Self-reported tag of an untyped payload
    UNKNOWN = "unknown"

    @classmethod
    def typed(cls) -> set["EventType"]:
        """Return tags whose metadata decodes into a typed payload."""
        return {cls.COMMIT, cls.SYNC, cls.RELEASE, cls.AUTO_RELEASE}

    @classmethod
    def lookup(cls, value: str) -> "EventType | None":
        """Return the member for a wire tag, or None if it is not recognised."""
        try:
            return cls(value)
        except ValueError:
            return None


class LogLevel(str, Enum):
    """How important an event is."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"

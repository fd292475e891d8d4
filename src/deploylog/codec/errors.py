"""deploylog codec errors."""


class DeployLogError(Exception):
    """Base error for deploylog operations."""

    def __init__(self, message: str, code: str = "DEPLOYLOG_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class MalformedEnvelope(DeployLogError):
    """Event document is not structurally valid."""

    def __init__(self, message: str, code: str = "MALFORMED_ENVELOPE"):
        super().__init__(message, code)


class EmptyEventType(MalformedEnvelope):
    """Event document has no type tag."""

    def __init__(self):
        super().__init__("event type is empty", "EMPTY_EVENT_TYPE")


class MalformedPayload(DeployLogError):
    """Event metadata does not match the shape its type requires."""

    def __init__(self, event_type: str, detail: str):
        super().__init__(
            f"Malformed {event_type} metadata: {detail}",
            "MALFORMED_PAYLOAD",
        )
        self.event_type = event_type
        self.detail = detail


class PayloadMismatch(DeployLogError):
    """Event carries a payload of the wrong shape for its type.

    Raised while rendering; it means the event was built without going
    through the decoder.
    """

    def __init__(self, event_type: str, expected: str, actual: str):
        super().__init__(
            f"{event_type} event requires {expected} metadata, got {actual}",
            "PAYLOAD_MISMATCH",
        )
        self.event_type = event_type
        self.expected = expected
        self.actual = actual

"""
Pytest fixtures for deploylog tests.
"""

import os

import pytest

# Ensure test config is set before importing deploylog modules.
os.environ.setdefault("DEPLOYLOG_LOG_LEVEL", "DEBUG")
os.environ.setdefault("DEPLOYLOG_SHOW_TIMESTAMPS", "true")

STARTED_AT = "2024-05-01T12:00:00Z"
ENDED_AT = "2024-05-01T12:00:05Z"


@pytest.fixture
def make_document():
    """Build a wire-format event document, overriding any envelope member."""

    def _make(event_type: str, metadata=None, **overrides):
        document = {
            "id": 0,
            "serviceIDs": [],
            "type": event_type,
            "startedAt": STARTED_AT,
            "endedAt": ENDED_AT,
            "logLevel": "info",
        }
        if metadata is not None:
            document["metadata"] = metadata
        document.update(overrides)
        return document

    return _make


@pytest.fixture
def release_metadata():
    """Metadata of a release of every service to repo:v2, requested by alice."""
    return {
        "revision": "0123456789abcdef",
        "result": {
            "default/app": {
                "status": "success",
                "perContainer": [
                    {"container": "app", "current": "repo:v1", "target": "repo:v2"},
                ],
            },
        },
        "spec": {"serviceSpecs": ["<all>"], "imageSpec": "<all latest>", "kind": "execute"},
        "cause": {"user": "alice", "message": ""},
    }

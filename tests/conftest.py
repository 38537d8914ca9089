"""Shared pytest fixtures for the coaching backend tests."""

import json
import os
from types import SimpleNamespace

import pytest

os.environ.setdefault("ANTHROPIC_API_KEY", "test-key")

from app import app as flask_app  # noqa: E402


class FakeMessages:
    """Stands in for client.messages; records every create() call."""

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(type="text", text=self.reply)])


class FakeClient:
    def __init__(self, reply="", error=None):
        self.messages = FakeMessages(reply=reply, error=error)

    @property
    def calls(self):
        return self.messages.calls


@pytest.fixture
def make_client():
    def _make(reply="", error=None):
        return FakeClient(reply=reply, error=error)

    return _make


@pytest.fixture
def report_payload():
    return {
        "playerName": "Sam",
        "hand": "Right",
        "eye": "Left",
        "handicap": 15,
        "summary": [
            "Athletic setup with a steep transition.",
            "Face stays open through impact.",
        ],
        "strengths": ["Balanced finish", "Good tempo"],
        "priorityFixes": [
            "Square the clubface earlier in the downswing.",
            "Shallow the club in transition.",
        ],
        "powerLeaks": ["Early extension through impact."],
        "swingRatings": {"swing": "B", "power": "B+", "consistency": "C+", "readiness": "Ready"},
        "checkpoints": [
            {"label": "P1", "phase": "Setup", "status": "GREEN", "note": "Solid posture."},
            {
                "label": "P4",
                "phase": "Top",
                "status": "YELLOW",
                "short": "Across the line.",
                "long": "Club points right of target at the top.",
                "youtubeQuery": "across the line fix drill",
            },
            {"label": "P6", "phase": "Impact", "status": "RED", "note": "Open face, heel strike."},
        ],
        "planBlocks": [
            {"title": "Days 1–3: Face control", "text": "Half swings closing the door."},
            {"title": "Days 4–14: Transfer", "text": "Blend into full swings on course."},
        ],
    }


@pytest.fixture
def report_reply(report_payload):
    return json.dumps({"report": report_payload})


@pytest.fixture
def http(make_client):
    """Flask test client with a fake Claude client installed."""
    fake = make_client()
    original = flask_app.config["COACH_CLIENT"]
    flask_app.config["COACH_CLIENT"] = fake
    flask_app.config["TESTING"] = True
    yield flask_app.test_client(), fake
    flask_app.config["COACH_CLIENT"] = original

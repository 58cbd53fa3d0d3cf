import json
from pathlib import Path

import pytest

from twilio_relay.twilio_client import TwilioHandle

EVENTS_DIR = Path(__file__).parent / "events"


class StubTwilioMsg:
    def __init__(self, sid="SMXXXXXXXXXXXXXXXXXXXXXXXXXXXXXXX", status="queued"):
        self.sid = sid
        self.status = status


class StubMessages:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    # Twilio SDK uses client.messages.create(...)
    def create(self, to, body, from_=None, messaging_service_sid=None):
        self.sent.append({
            "to": to,
            "from_": from_,
            "messaging_service_sid": messaging_service_sid,
            "body": body,
        })
        if self.error is not None:
            raise self.error
        return StubTwilioMsg()


class StubTwilioClient:
    def __init__(self, error=None):
        self.messages = StubMessages(error)


class StubStore:
    """Secret store returning a fixed document for one path."""

    def __init__(self, document=None, error=None):
        self.document = document
        self.error = error
        self.reads = []

    def get(self, path):
        self.reads.append(path)
        if self.error is not None:
            raise self.error
        return self.document


def load_event(name):
    with open(EVENTS_DIR / name, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def stub_twilio():
    return StubTwilioClient()


@pytest.fixture
def handle(stub_twilio):
    return TwilioHandle(client=stub_twilio, account_sid="ACxxx")

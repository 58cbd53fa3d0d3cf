import dataclasses

import pytest

from twilio_relay.credentials import TwilioCredentials
from twilio_relay.errors import ConfigurationError, CredentialErrorKind
from twilio_relay.twilio_client import TwilioHandle, build_client


class FakeTwilioClient:
    def __init__(self, username, password):
        self.username = username
        self.password = password


def test_build_client_uses_given_credentials(monkeypatch):
    monkeypatch.setattr("twilio_relay.twilio_client.TwilioClient", FakeTwilioClient, raising=True)

    handle = build_client(TwilioCredentials("AC1", "tok"))

    assert handle.account_sid == "AC1"
    assert handle.client.username == "AC1"
    assert handle.client.password == "tok"


def test_build_client_loads_credentials_when_not_given(monkeypatch):
    monkeypatch.setattr("twilio_relay.twilio_client.TwilioClient", FakeTwilioClient, raising=True)
    monkeypatch.setattr(
        "twilio_relay.twilio_client.load_credentials",
        lambda: TwilioCredentials("AC2", "tok2"),
        raising=True,
    )

    assert build_client().account_sid == "AC2"


def test_build_client_propagates_configuration_errors(monkeypatch):
    def failing_load():
        raise ConfigurationError(CredentialErrorKind.NOT_FOUND, "not found")

    monkeypatch.setattr("twilio_relay.twilio_client.load_credentials", failing_load, raising=True)

    with pytest.raises(ConfigurationError):
        build_client()


def test_client_construction_failure_is_wrapped(monkeypatch):
    def broken_client(username, password):
        raise TypeError("bad credentials type")

    monkeypatch.setattr("twilio_relay.twilio_client.TwilioClient", broken_client, raising=True)

    with pytest.raises(RuntimeError, match="Failed to initialize Twilio client.") as exc:
        build_client(TwilioCredentials("AC1", "tok"))

    assert isinstance(exc.value.__cause__, TypeError)


def test_real_twilio_client_is_built_offline():
    handle = build_client(TwilioCredentials("AC" + "0" * 32, "tok"))

    assert handle.client.username == "AC" + "0" * 32


def test_handle_is_immutable():
    handle = TwilioHandle(client=object(), account_sid="AC1")

    with pytest.raises(dataclasses.FrozenInstanceError):
        handle.account_sid = "AC2"

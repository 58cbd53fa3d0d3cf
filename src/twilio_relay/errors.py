"""Exceptions raised by the relay."""

import enum


class CredentialErrorKind(enum.Enum):
    """Why the Twilio credentials could not be loaded."""

    STORE_NOT_CONFIGURED = "store_not_configured"
    STORE_UNAVAILABLE = "store_unavailable"
    NOT_FOUND = "not_found"
    INCOMPLETE = "incomplete"


class ConfigurationError(RuntimeError):
    """
    Fatal startup error. Nothing that depends on the Twilio credentials may
    be served once this has been raised.
    """

    def __init__(self, kind: CredentialErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class InvalidRecipientError(ValueError):
    """A destination address is not in the format its channel requires."""

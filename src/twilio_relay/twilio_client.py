# twilio_relay/twilio_client.py

from dataclasses import dataclass
from typing import Optional

from twilio.rest import Client as TwilioClient

from twilio_relay.credentials import TwilioCredentials, load_credentials
from twilio_relay.logger import get_logger

logger = get_logger("twilio_client")


@dataclass(frozen=True)
class TwilioHandle:
    """An initialized Twilio client and the account it is bound to."""

    client: TwilioClient
    account_sid: str


def build_client(credentials: Optional[TwilioCredentials] = None) -> TwilioHandle:
    """
    Build and return an authenticated Twilio client handle.

    Loads credentials from the secret store unless they are passed in.
    Raises ConfigurationError if the credentials cannot be loaded.
    """
    if credentials is None:
        credentials = load_credentials()

    try:
        client = TwilioClient(credentials.account_sid, credentials.auth_token)
    except Exception as e:
        logger.error(
            "Failed to initialize Twilio client",
            extra={"error": str(e)},
            exc_info=True,
        )
        raise RuntimeError("Failed to initialize Twilio client.") from e

    logger.info(
        "Twilio client initialized successfully",
        extra={"account_sid": credentials.account_sid},
    )
    return TwilioHandle(client=client, account_sid=credentials.account_sid)

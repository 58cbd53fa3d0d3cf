from dataclasses import dataclass
from typing import Optional

from twilio_relay.config import SECRET_PATH
from twilio_relay.errors import ConfigurationError, CredentialErrorKind
from twilio_relay.logger import get_logger
from twilio_relay.secret_store import store_from_env

logger = get_logger("credentials")

ACCOUNT_SID = "account_sid"
AUTH_TOKEN = "auth_token"
USERNAME = "user"
PASSWORD = "password"


def _masked(value: Optional[str]) -> str:
    return "None" if value is None else "**not shown**"


@dataclass(frozen=True, repr=False)
class TwilioCredentials:
    account_sid: Optional[str]
    auth_token: Optional[str]
    username: Optional[str] = None
    password: Optional[str] = None

    def is_valid(self) -> bool:
        return bool(self.account_sid) and bool(self.auth_token)

    def __repr__(self) -> str:
        return (
            f"TwilioCredentials(account_sid={self.account_sid!r}, "
            f"auth_token={_masked(self.auth_token)}, "
            f"username={self.username!r}, "
            f"password={_masked(self.password)})"
        )


def _field(document: dict, key: str) -> Optional[str]:
    value = document.get(key)
    if isinstance(value, str) and value:
        return value
    return None


def _fail(kind: CredentialErrorKind, msg: str, **fields) -> ConfigurationError:
    logger.error(msg, extra={"kind": kind.value, **fields})
    return ConfigurationError(kind, msg)


def load_credentials(store=None, path: str = SECRET_PATH) -> TwilioCredentials:
    """
    Fetch the Twilio credentials document from the secret store.

    The document must carry ``account_sid`` and ``auth_token``; ``user`` and
    ``password`` are optional. Any failure raises ConfigurationError, and the
    message never contains secret values.
    """
    if store is None:
        store = store_from_env()

    logger.debug("Using secret store location", extra={"path": path})

    try:
        document = store.get(path)
    except Exception as e:
        raise _fail(
            CredentialErrorKind.STORE_UNAVAILABLE,
            f"Exception retrieving Twilio connection parameters: {e}",
            path=path,
        ) from e

    if document is None:
        raise _fail(
            CredentialErrorKind.NOT_FOUND,
            "Failed to retrieve Twilio connection parameters from the secret store.",
            path=path,
        )

    credentials = TwilioCredentials(
        account_sid=_field(document, ACCOUNT_SID),
        auth_token=_field(document, AUTH_TOKEN),
        username=_field(document, USERNAME),
        password=_field(document, PASSWORD),
    )

    if not credentials.is_valid():
        account_sid_present = credentials.account_sid is not None
        auth_token_present = credentials.auth_token is not None
        raise _fail(
            CredentialErrorKind.INCOMPLETE,
            "Incomplete Twilio connection properties found "
            f"(account_sid present: {account_sid_present}, "
            f"auth_token present: {auth_token_present}).",
            path=path,
        )

    logger.debug("Retrieved Twilio properties: %r", credentials)
    return credentials

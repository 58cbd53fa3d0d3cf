import os
from dataclasses import dataclass
from typing import Optional

from twilio_relay.errors import ConfigurationError, CredentialErrorKind
from twilio_relay.logger import get_logger

logger = get_logger("config")

# Where the Twilio credential document lives in the secret store.
SECRET_MOUNT = "secret"
SECRET_PATH = "twilio"

# Senders registered with Twilio for this account.
WHATSAPP_FROM = "whatsapp:+14155238886"
MESSAGING_SERVICE_SID = "MG6888ce1728921d9754dfb8c7b6208401"

DEFAULT_CHANNEL = "whatsapp"

BACKEND_VAULT = "vault"
BACKEND_SECRETS_MANAGER = "secretsmanager"


@dataclass(frozen=True)
class StoreSettings:
    backend: str
    vault_addr: Optional[str] = None
    vault_token: Optional[str] = None
    vault_namespace: Optional[str] = None
    region_name: Optional[str] = None


def _missing_env(missing: list) -> ConfigurationError:
    msg = f"Missing required environment variables: {', '.join(missing)}"
    logger.error(msg)
    return ConfigurationError(CredentialErrorKind.STORE_NOT_CONFIGURED, msg)


def load_store_settings() -> StoreSettings:
    """
    Resolve the secret store connection settings from environment variables.

    SECRET_BACKEND selects the store: "vault" (default) or "secretsmanager".
    For Vault, VAULT_ADDR and VAULT_TOKEN are required and VAULT_NAMESPACE is
    optional. For Secrets Manager, AWS_REGION defaults to us-east-1.

    Raises ConfigurationError with a clear message if something is missing.
    """
    backend = os.getenv("SECRET_BACKEND", BACKEND_VAULT).strip().lower()

    if backend == BACKEND_VAULT:
        vault_addr = os.getenv("VAULT_ADDR")
        vault_token = os.getenv("VAULT_TOKEN")

        missing = []
        if not vault_addr:
            missing.append("VAULT_ADDR")
        if not vault_token:
            missing.append("VAULT_TOKEN")
        if missing:
            raise _missing_env(missing)

        return StoreSettings(
            backend=backend,
            vault_addr=vault_addr,
            vault_token=vault_token,
            vault_namespace=os.getenv("VAULT_NAMESPACE") or None,
        )

    if backend == BACKEND_SECRETS_MANAGER:
        return StoreSettings(
            backend=backend,
            region_name=os.getenv("AWS_REGION", "us-east-1"),
        )

    msg = (
        f"Invalid SECRET_BACKEND='{backend}'. "
        f"Must be '{BACKEND_VAULT}' or '{BACKEND_SECRETS_MANAGER}'."
    )
    logger.error(msg)
    raise ConfigurationError(CredentialErrorKind.STORE_NOT_CONFIGURED, msg)

import json
from typing import Optional

import boto3
import hvac
from botocore.exceptions import ClientError
from hvac.exceptions import InvalidPath

from twilio_relay.config import (
    BACKEND_SECRETS_MANAGER,
    SECRET_MOUNT,
    StoreSettings,
    load_store_settings,
)
from twilio_relay.logger import get_logger

logger = get_logger("secret_store")


class VaultKVStore:
    """
    Reads secret documents from a HashiCorp Vault KV version 1 backend.

    KV v1 has no secret versioning: a path holds exactly one document.
    """

    def __init__(self, client: hvac.Client, mount_point: str = SECRET_MOUNT):
        self.client = client
        self.mount_point = mount_point

    def get(self, path: str) -> Optional[dict]:
        logger.debug(
            "Reading secret from Vault",
            extra={"mount_point": self.mount_point, "path": path},
        )
        try:
            resp = self.client.secrets.kv.v1.read_secret(
                path=path, mount_point=self.mount_point
            )
        except InvalidPath:
            return None

        data = (resp or {}).get("data")
        if not isinstance(data, dict):
            return None
        return data


class SecretsManagerStore:
    """
    Reads secret documents from AWS Secrets Manager.

    The secret named ``path`` is expected to hold a JSON object, e.g.:

        {
          "account_sid": "...",
          "auth_token": "..."
        }
    """

    def __init__(self, client):
        self.client = client

    def get(self, path: str) -> Optional[dict]:
        logger.debug("Reading secret from Secrets Manager", extra={"secret_name": path})
        try:
            resp = self.client.get_secret_value(SecretId=path)
        except ClientError as e:
            if e.response["Error"]["Code"] == "ResourceNotFoundException":
                return None
            raise

        secret_str = resp.get("SecretString")
        if not secret_str:
            logger.warning(
                "Secret has no SecretString payload", extra={"secret_name": path}
            )
            return None

        try:
            data = json.loads(secret_str)
        except json.JSONDecodeError as e:
            logger.error(
                "SecretString is not valid JSON",
                extra={"secret_name": path, "error": str(e)},
            )
            raise

        if not isinstance(data, dict):
            raise ValueError(f"Secret '{path}' is not a JSON object")
        return data


def store_from_env(settings: Optional[StoreSettings] = None):
    """Build the secret store selected by SECRET_BACKEND."""
    settings = settings or load_store_settings()

    if settings.backend == BACKEND_SECRETS_MANAGER:
        logger.info(
            "Using AWS Secrets Manager secret store",
            extra={"region": settings.region_name},
        )
        return SecretsManagerStore(
            boto3.client("secretsmanager", region_name=settings.region_name)
        )

    logger.info(
        "Using Vault KV v1 secret store",
        extra={"vault_addr": settings.vault_addr, "mount_point": SECRET_MOUNT},
    )
    client = hvac.Client(
        url=settings.vault_addr,
        token=settings.vault_token,
        namespace=settings.vault_namespace,
    )
    return VaultKVStore(client)

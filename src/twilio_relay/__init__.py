"""
Twilio Relay Utilities
======================

Shared helper modules for the Twilio messaging relay. It includes:

- logger.py          → structured JSON logging
- config.py          → environment settings and fixed sender constants
- secret_store.py    → Vault KV v1 / AWS Secrets Manager readers
- credentials.py     → Twilio credential loading and validation
- twilio_client.py   → authenticated Twilio client builder
- dispatcher.py      → number normalization and SMS/WhatsApp dispatch

Credentials are loaded once per container; everything built from them is
immutable afterwards, so the helpers are safe to share across invocations.

Environment variables expected:
  • SECRET_BACKEND             - "vault" (default) or "secretsmanager"
  • VAULT_ADDR / VAULT_TOKEN   - Vault connection (vault backend)
  • VAULT_NAMESPACE            - Vault Enterprise namespace (optional)
  • AWS_REGION                 - Region for Secrets Manager (default: us-east-1)
  • LOG_LEVEL                  - Log verbosity (default: INFO)
"""

__version__ = "1.0.0"

from twilio_relay.credentials import TwilioCredentials, load_credentials
from twilio_relay.dispatcher import MessageDispatcher, MessageResult
from twilio_relay.errors import (
    ConfigurationError,
    CredentialErrorKind,
    InvalidRecipientError,
)
from twilio_relay.twilio_client import TwilioHandle, build_client

__all__ = [
    "__version__",
    "ConfigurationError",
    "CredentialErrorKind",
    "InvalidRecipientError",
    "MessageDispatcher",
    "MessageResult",
    "TwilioCredentials",
    "TwilioHandle",
    "build_client",
    "load_credentials",
]

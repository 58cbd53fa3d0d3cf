from dataclasses import dataclass
from typing import Optional, Union

from twilio.base.exceptions import TwilioRestException

from twilio_relay.config import DEFAULT_CHANNEL, MESSAGING_SERVICE_SID, WHATSAPP_FROM
from twilio_relay.errors import InvalidRecipientError
from twilio_relay.logger import get_logger
from twilio_relay.twilio_client import TwilioHandle

logger = get_logger("dispatcher")

WHATSAPP_PREFIX = "whatsapp:"
CHANNEL_SMS = "sms"
CHANNEL_WHATSAPP = "whatsapp"


@dataclass(frozen=True)
class MessageResult:
    """Outcome of a single send: a Twilio message SID and status, or an error."""

    success: bool
    sid: Optional[str] = None
    status: Optional[str] = None
    error: Optional[str] = None
    code: Optional[Union[int, str]] = None

    @classmethod
    def delivered(cls, sid: str, status: str) -> "MessageResult":
        return cls(success=True, sid=sid, status=status)

    @classmethod
    def failed(cls, error: str, code: Optional[Union[int, str]] = None) -> "MessageResult":
        return cls(success=False, error=error, code=code)


def normalize_channel(channel: Optional[str]) -> str:
    """Trim and lowercase; blank means WhatsApp."""
    ch = (channel or "").strip().lower()
    return ch or DEFAULT_CHANNEL


def normalize_whatsapp(address: Optional[str]) -> str:
    s = (address or "").strip()
    if s.startswith(WHATSAPP_PREFIX):
        return s
    if s.startswith("+"):
        return WHATSAPP_PREFIX + s
    raise InvalidRecipientError(
        f"WhatsApp numbers must start with '+' or 'whatsapp:'. Got: {address}"
    )


def normalize_sms(address: Optional[str]) -> str:
    s = (address or "").strip()
    if not s.startswith("+"):
        raise InvalidRecipientError(
            f"SMS numbers must be E.164 like +447700900000. Got: {address}"
        )
    return s


class MessageDispatcher:
    """
    Sends a message over SMS or WhatsApp through Twilio.

    SMS goes out through the Messaging Service, WhatsApp from the fixed
    WhatsApp-enabled sender. Every outcome comes back as a MessageResult;
    send() does not raise.
    """

    def __init__(
        self,
        handle: TwilioHandle,
        whatsapp_from: str = WHATSAPP_FROM,
        messaging_service_sid: str = MESSAGING_SERVICE_SID,
    ):
        self.handle = handle
        self.whatsapp_from = whatsapp_from
        self.messaging_service_sid = messaging_service_sid

    def send(self, to: str, message: str, channel: Optional[str] = None) -> MessageResult:
        try:
            if normalize_channel(channel) == CHANNEL_SMS:
                to_sms = normalize_sms(to)
                resp = self.handle.client.messages.create(
                    to=to_sms,
                    messaging_service_sid=self.messaging_service_sid,
                    body=message,
                )
                logger.debug(
                    "dispatcher.sms_sent",
                    extra={"to": to_sms, "sid": resp.sid},
                )
            else:
                to_wa = normalize_whatsapp(to)
                resp = self.handle.client.messages.create(
                    to=to_wa,
                    from_=self.whatsapp_from,
                    body=message,
                )
                logger.debug(
                    "dispatcher.whatsapp_sent",
                    extra={"to": to_wa, "from": self.whatsapp_from, "sid": resp.sid},
                )

            return MessageResult.delivered(resp.sid, str(resp.status))

        except TwilioRestException as e:
            logger.error(
                "dispatcher.twilio_error",
                extra={"to": to, "error": e.msg, "error_code": e.code},
            )
            return MessageResult.failed(e.msg, e.code)
        except InvalidRecipientError as e:
            logger.warning(
                "dispatcher.invalid_recipient",
                extra={"to": to, "channel": channel, "error": str(e)},
            )
            return MessageResult.failed(str(e))
        except Exception as e:
            logger.error(
                "dispatcher.unexpected_error",
                extra={"to": to, "error": str(e)},
                exc_info=True,
            )
            return MessageResult.failed(str(e))

    def send_whatsapp(self, to: str, message: str) -> MessageResult:
        return self.send(to, message, CHANNEL_WHATSAPP)

    def send_sms(self, to: str, message: str) -> MessageResult:
        return self.send(to, message, CHANNEL_SMS)

import base64
import json
from typing import Any, Callable, Dict, Optional

from twilio_relay import twilio_client
from twilio_relay.dispatcher import MessageDispatcher, MessageResult
from twilio_relay.logger import get_logger

logger = get_logger("send")

# Credentials are read from the secret store once per container. If this
# raises, the import fails and none of the handlers below are ever invoked.
dispatcher = MessageDispatcher(twilio_client.build_client())

REQUIRED_FIELDS_ERROR = "'to' and 'message' are required"
INVALID_BODY_ERROR = "Request body must be a JSON object"


class InvalidBody(ValueError):
    pass


def _response(status_code: int, payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "statusCode": status_code,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps(payload),
    }


def _parse_body(event: dict) -> dict:
    """
    Extract and parse the JSON body from the Lambda event.

    - For API Gateway / HttpApi: event["body"] is a JSON string, possibly
      base64-encoded.
    - For direct invocations: event["body"] may already be a dict.
    """
    body = event.get("body")

    if body is None or body == "":
        return {}
    if isinstance(body, dict):
        return body
    if not isinstance(body, str):
        raise InvalidBody(INVALID_BODY_ERROR)

    raw_body = body
    try:
        if event.get("isBase64Encoded"):
            raw_body = base64.b64decode(body).decode("utf-8")
        parsed = json.loads(raw_body)
    except ValueError:
        logger.warning("send.invalid_json", extra={"body_preview": raw_body[:200]})
        raise InvalidBody(INVALID_BODY_ERROR)

    if not isinstance(parsed, dict):
        raise InvalidBody(INVALID_BODY_ERROR)
    return parsed


def _field(body: dict, key: str) -> str:
    value = body.get(key)
    return "" if value is None else str(value).strip()


def _result_response(result: MessageResult) -> Dict[str, Any]:
    if result.success:
        return _response(200, {"ok": True, "sid": result.sid, "status": result.status})

    payload: Dict[str, Any] = {"ok": False, "error": result.error}
    if result.code is not None:
        payload["code"] = result.code
    return _response(400, payload)


def _handle(
    event: dict,
    route: str,
    send: Callable[[str, str, Optional[str]], MessageResult],
    read_channel: bool = False,
) -> Dict[str, Any]:
    try:
        body = _parse_body(event)
        to = _field(body, "to")
        text = _field(body, "message")
        channel = _field(body, "channel") if read_channel else None

        if not to or not text:
            logger.info("send.missing_fields", extra={"route": route})
            return _response(400, {"ok": False, "error": REQUIRED_FIELDS_ERROR})

        result = send(to, text, channel)
        logger.info(
            "send.dispatched",
            extra={
                "route": route,
                "to": to,
                "channel": channel,
                "ok": result.success,
                "sid": result.sid,
                "error_code": result.code,
            },
        )
        return _result_response(result)

    except InvalidBody as e:
        return _response(400, {"ok": False, "error": str(e)})
    except Exception as e:
        # Returns the raw message to the caller; see DESIGN.md.
        logger.error(
            "send.unexpected_error",
            extra={"route": route, "error": str(e)},
            exc_info=True,
        )
        return _response(500, {"ok": False, "error": str(e)})


def send_handler(event, context):
    """POST /api/send: channel taken from the body, WhatsApp by default."""
    return _handle(
        event,
        "/api/send",
        lambda to, text, channel: dispatcher.send(to, text, channel),
        read_channel=True,
    )


def send_whatsapp_handler(event, context):
    """POST /api/send/whatsapp"""
    return _handle(
        event,
        "/api/send/whatsapp",
        lambda to, text, _channel: dispatcher.send_whatsapp(to, text),
    )


def send_sms_handler(event, context):
    """POST /api/send/sms"""
    return _handle(
        event,
        "/api/send/sms",
        lambda to, text, _channel: dispatcher.send_sms(to, text),
    )

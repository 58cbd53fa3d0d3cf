import json

from twilio_relay import __version__
from twilio_relay.logger import log


def lambda_handler(event, context):
    method = event.get("requestContext", {}).get("http", {}).get("method", "GET")
    log("health.check", path="/health", method=method)
    return {
        "statusCode": 200,
        "headers": {"Content-Type": "application/json"},
        "body": json.dumps({"ok": True, "status": "ok", "version": __version__}),
    }

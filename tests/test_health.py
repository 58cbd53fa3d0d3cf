import json

import health
from conftest import load_event
from twilio_relay import __version__


def test_health_ok():
    resp = health.lambda_handler(load_event("api_health.json"), None)

    assert resp["statusCode"] == 200
    assert json.loads(resp["body"]) == {"ok": True, "status": "ok", "version": __version__}


def test_health_without_request_context():
    resp = health.lambda_handler({}, None)

    assert resp["statusCode"] == 200

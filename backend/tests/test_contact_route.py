# backend/tests/test_contact_route.py
import pytest
from fastapi.testclient import TestClient

from portfolio.core.mailer import DeliveryError, ErrorKind, get_mailer
from portfolio.core.settings import DeliveryConfig, get_delivery_config
from portfolio.main import app

client = TestClient(app)

CONFIG = DeliveryConfig(
    recipient="owner@example.com",
    sender="noreply@example.com",
    access_key_id="AKIAFAKE",
    secret_access_key="fake-secret",
)


class RecordingMailer:
    def __init__(self, error=None):
        self.sent = []
        self.error = error

    def send(self, destination, source, reply_to, subject, body_text):
        self.sent.append((destination, source, reply_to, subject))
        if self.error:
            raise self.error
        return "msg-1"


@pytest.fixture
def mailer():
    m = RecordingMailer()
    app.dependency_overrides[get_mailer] = lambda: m
    app.dependency_overrides[get_delivery_config] = lambda: CONFIG
    yield m
    app.dependency_overrides.clear()


def test_successful_submission(mailer):
    resp = client.post(
        "/api/contact",
        data={"name": "", "email": "visitor@example.com", "message": "Hello!"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert mailer.sent == [
        (["owner@example.com"], "noreply@example.com", ["visitor@example.com"], "Portfolio Contact: visitor@example.com")
    ]


def test_honeypot_submission_looks_successful(mailer):
    resp = client.post(
        "/api/contact",
        data={"name": "spam", "email": "bot@example.com", "message": "buy now"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert mailer.sent == []


def test_validation_errors_returned_with_200(mailer):
    resp = client.post("/api/contact", data={"email": "nope", "message": ""})
    assert resp.status_code == 200
    assert resp.json() == {
        "errors": {
            "email": "Please enter a valid email address.",
            "message": "Please enter a message.",
        }
    }
    assert mailer.sent == []


def test_delivery_failure_returns_500(mailer):
    mailer.error = DeliveryError(ErrorKind.SENDING_PAUSED, "Sending paused for this account")
    resp = client.post("/api/contact", data={"email": "visitor@example.com", "message": "Hello!"})
    assert resp.status_code == 500
    assert resp.json() == {"errors": {"message": "Email service is temporarily unavailable."}}


def test_missing_configuration_returns_500():
    m = RecordingMailer()
    app.dependency_overrides[get_mailer] = lambda: m
    app.dependency_overrides[get_delivery_config] = lambda: DeliveryConfig()
    try:
        resp = client.post("/api/contact", data={"email": "visitor@example.com", "message": "Hello!"})
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code == 500
    assert resp.json() == {"errors": {"message": "Server configuration error. Please contact the administrator."}}
    assert m.sent == []


def test_form_configuration_endpoint():
    resp = client.get("/api/contact/form")
    assert resp.status_code == 200
    data = resp.json()
    fields = {f["name"]: f for f in data["fields"]}
    assert fields["name"]["hidden"] is True
    assert fields["email"]["maxLength"] == 512
    assert fields["email"]["autoComplete"] == "email"
    assert fields["message"]["maxLength"] == 4096
    assert fields["message"]["multiline"] is True
    assert data["delays"]["form"]["email"] == {"--delay": "500ms"}
    assert data["delays"]["form"]["title"] == {"--delay": "360ms"}
    assert data["delays"]["success"]["button"] == {"--delay": "400ms"}


def test_unexpected_mailer_failure_still_returns_json(mailer):
    mailer.error = RuntimeError("connection reset")
    resp = client.post("/api/contact", data={"email": "visitor@example.com", "message": "Hello!"})
    assert resp.status_code == 500
    assert resp.json() == {"errors": {"message": "Failed to send message. Please try again later."}}

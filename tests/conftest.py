"""Pytest configuration and shared fixtures"""
import pytest

from app import create_app


VALID_FORM = {
    "name": "Jane Doe",
    "email": "jane@example.com",
    "phone": "+15551234567",
    "message": "Hello",
}

MAIL_SETTINGS = {
    "MAIL_SENDER_ADDRESS": "sender@yahoo.com",
    "MAIL_SENDER_CREDENTIAL": "app-password",
    "MAIL_RECIPIENT_ADDRESS": "inbox@example.com",
}


class FakeSMTP:
    """Stand-in for aiosmtplib.SMTP that records what it was asked to do"""

    instances = []
    connect_error = None
    login_error = None
    send_error = None

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.logged_in_as = None
        self.sent = []
        self.closed = False
        type(self).instances.append(self)

    async def __aenter__(self):
        if self.connect_error is not None:
            raise self.connect_error
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.closed = True
        return False

    async def login(self, username, password):
        if self.login_error is not None:
            raise self.login_error
        self.logged_in_as = (username, password)

    async def send_message(self, message):
        if self.send_error is not None:
            raise self.send_error
        self.sent.append(message)
        return {}, "OK"


@pytest.fixture
def fake_smtp():
    """A fresh FakeSMTP subclass so class-level state does not leak between tests"""
    return type("FakeSMTPForTest", (FakeSMTP,), {"instances": []})


@pytest.fixture
def make_app(fake_smtp):
    """Build a testing app with the fake SMTP client and the given overrides"""
    def _make_app(**overrides):
        config = {"SMTP_CLIENT_FACTORY": fake_smtp, **MAIL_SETTINGS}
        config.update(overrides)
        return create_app("testing", overrides=config)
    return _make_app


@pytest.fixture
def app(make_app):
    return make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def valid_form():
    return dict(VALID_FORM)

"""
Tests for verification e-mail delivery.

aiosmtplib.send is replaced with a stub so no SMTP server is needed.
"""

import asyncio

import aiosmtplib
import pytest

from app.core.exception import DeliveryError
from app.services import mailer
from app.services.mailer import EmailSender, deliver_verification_email, verification_link


def run(coro):
    return asyncio.run(coro)


class TestEmailSender:

    def test_message_contains_link(self):
        sender = EmailSender(host="smtp.test", sender="noreply@civic.test")
        msg = sender.build_message("alice@example.org", "tok123")

        assert msg["To"] == "alice@example.org"
        assert msg["From"] == "noreply@civic.test"
        assert verification_link("tok123") in msg.get_content()
        assert verification_link("tok123").endswith("/api/auth/verify/tok123")

    def test_unconfigured_sender_only_logs(self, monkeypatch):
        calls = []

        async def fake_send(*args, **kwargs):
            calls.append(kwargs)

        monkeypatch.setattr(aiosmtplib, "send", fake_send)
        run(EmailSender(host="").send("alice@example.org", "tok"))

        assert calls == []

    def test_starttls_on_submission_port(self, monkeypatch):
        calls = []

        async def fake_send(message, **kwargs):
            calls.append(kwargs)

        monkeypatch.setattr(mailer.aiosmtplib, "send", fake_send)
        run(EmailSender(host="smtp.test", port=587, use_tls=True).send("alice@example.org", "tok"))

        assert calls[0]["hostname"] == "smtp.test"
        assert calls[0]["start_tls"] is True
        assert calls[0]["use_tls"] is False

    def test_implicit_tls_on_465(self, monkeypatch):
        calls = []

        async def fake_send(message, **kwargs):
            calls.append(kwargs)

        monkeypatch.setattr(mailer.aiosmtplib, "send", fake_send)
        run(EmailSender(host="smtp.test", port=465, use_tls=True).send("alice@example.org", "tok"))

        assert calls[0]["use_tls"] is True
        assert calls[0]["start_tls"] is False

    def test_smtp_failure_raises_delivery_error(self, monkeypatch):
        async def fake_send(message, **kwargs):
            raise aiosmtplib.SMTPException("mailbox unavailable")

        monkeypatch.setattr(mailer.aiosmtplib, "send", fake_send)
        with pytest.raises(DeliveryError):
            run(EmailSender(host="smtp.test").send("alice@example.org", "tok"))

    def test_unreachable_server_raises_delivery_error(self, monkeypatch):
        async def fake_send(message, **kwargs):
            raise ConnectionRefusedError("connection refused")

        monkeypatch.setattr(mailer.aiosmtplib, "send", fake_send)
        with pytest.raises(DeliveryError):
            run(EmailSender(host="smtp.test").send("alice@example.org", "tok"))


class TestDeliverVerificationEmail:

    def test_success(self):
        class Sender:
            async def send(self, to_address, token):
                pass

        assert run(deliver_verification_email(Sender(), "alice@example.org", "tok")) is True

    def test_failure_is_logged_not_raised(self):
        class Sender:
            async def send(self, to_address, token):
                raise DeliveryError("boom")

        assert run(deliver_verification_email(Sender(), "alice@example.org", "tok")) is False

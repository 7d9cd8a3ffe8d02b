import asyncio

import resend

from weeklychef import email_service
from weeklychef.email_service import ResendEmailSender


def test_unconfigured_sender_returns_false(monkeypatch):
    calls = []
    monkeypatch.setattr(resend.Emails, "send", lambda params: calls.append(params))

    sent = asyncio.run(ResendEmailSender(None, "Chef <info@example.com>").send_email("a@x.com", "Hi", "<mjml/>"))

    assert sent is False
    assert calls == []


def test_send_compiles_mjml_and_calls_resend(monkeypatch):
    calls = []
    monkeypatch.setattr(email_service, "mjml_to_html", lambda content: {"html": "<p>compiled</p>", "errors": []})
    monkeypatch.setattr(resend.Emails, "send", lambda params: calls.append(params) or {"id": "email_1"})

    sender = ResendEmailSender("re_test", "Chef <info@example.com>")
    sent = asyncio.run(sender.send_email("a@x.com", "Booking Confirmation", "<mjml/>"))

    assert sent is True
    assert calls == [
        {
            "from": "Chef <info@example.com>",
            "to": ["a@x.com"],
            "subject": "Booking Confirmation",
            "html": "<p>compiled</p>",
        }
    ]


def test_resend_failure_returns_false(monkeypatch):
    def boom(params):
        raise RuntimeError("rate limited")

    monkeypatch.setattr(email_service, "mjml_to_html", lambda content: {"html": "<p/>", "errors": []})
    monkeypatch.setattr(resend.Emails, "send", boom)

    sender = ResendEmailSender("re_test", "Chef <info@example.com>")

    assert asyncio.run(sender.send_email("a@x.com", "Hi", "<mjml/>", from_address="System <s@example.com>")) is False

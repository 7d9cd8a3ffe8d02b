import pytest

from conftest import ORGANIZER_EMAIL, ORGANIZER_PHONE


def application_payload(**overrides):
    payload = {
        "firstName": "Giulia",
        "lastName": "Bianchi",
        "email": "Giulia@Example.com",
        "phone": "+39 348 555 0101",
        "role": "Chef",
        "city": "Firenze",
    }
    payload.update(overrides)
    return payload


def test_application_notifies_candidate_and_organizer(client, email_sender, messenger):
    response = client.post("/api/notify-recruitment", json=application_payload())

    assert response.status_code == 200
    assert response.json() == {"success": True}

    recipients = {mail["to"]: mail for mail in email_sender.sent}
    assert set(recipients) == {"giulia@example.com", ORGANIZER_EMAIL}
    assert recipients["giulia@example.com"]["subject"] == "Application received - Weekly Private Chef"
    organizer_mail = recipients[ORGANIZER_EMAIL]
    assert organizer_mail["subject"] == "New Application: Giulia Bianchi (Chef)"
    assert organizer_mail["from"] == "System <system@weeklyprivatechef.test>"
    assert "Firenze" in organizer_mail["body"]

    messages = {msg["to"]: msg for msg in messenger.sent}
    assert set(messages) == {"+39 348 555 0101", ORGANIZER_PHONE}
    assert all(msg["channel"] == "whatsapp" for msg in messenger.sent)
    assert "Giulia Bianchi applied as Chef in Firenze" in messages[ORGANIZER_PHONE]["body"]


def test_application_accepts_snake_case_keys(client, email_sender):
    payload = {
        "first_name": "Luca",
        "last_name": "Verdi",
        "email": "luca@example.com",
        "role": "Waiter",
    }

    response = client.post("/api/notify-recruitment", json=payload)

    assert response.status_code == 200
    subjects = {mail["subject"] for mail in email_sender.sent}
    assert "New Application: Luca Verdi (Waiter)" in subjects


def test_application_without_phone_skips_candidate_whatsapp(client, messenger):
    payload = application_payload()
    del payload["phone"]

    response = client.post("/api/notify-recruitment", json=payload)

    assert response.status_code == 200
    assert [msg["to"] for msg in messenger.sent] == [ORGANIZER_PHONE]


def test_application_defaults_role_and_city(client, messenger):
    payload = application_payload(role="", city=None)

    response = client.post("/api/notify-recruitment", json=payload)

    assert response.status_code == 200
    organizer_msg = next(msg for msg in messenger.sent if msg["to"] == ORGANIZER_PHONE)
    assert "applied as Staff in N/A" in organizer_msg["body"]


@pytest.mark.parametrize("missing", ["email", "firstName"])
def test_application_missing_required_field_is_rejected(client, email_sender, messenger, missing):
    payload = application_payload()
    del payload[missing]

    response = client.post("/api/notify-recruitment", json=payload)

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}
    assert email_sender.sent == []
    assert messenger.sent == []


def test_application_blank_first_name_is_rejected(client, email_sender):
    response = client.post("/api/notify-recruitment", json=application_payload(firstName="   "))

    assert response.status_code == 400
    assert response.json() == {"error": "Missing required fields"}
    assert email_sender.sent == []


def test_application_invalid_email_is_rejected(client, email_sender):
    response = client.post("/api/notify-recruitment", json=application_payload(email="not-an-email"))

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid email"}
    assert email_sender.sent == []


def test_application_form_encoded(client, email_sender):
    response = client.post("/api/notify-recruitment", data=application_payload())

    assert response.status_code == 200
    assert len(email_sender.sent) == 2


def test_failed_channel_does_not_fail_application(client, email_sender, messenger):
    email_sender.raise_for.add(ORGANIZER_EMAIL)

    response = client.post("/api/notify-recruitment", json=application_payload())

    assert response.status_code == 200
    assert [mail["to"] for mail in email_sender.sent] == ["giulia@example.com"]
    assert len(messenger.sent) == 2

import hashlib
import hmac
import json
import os
import time
from datetime import date

# Configuration is read at import time
WEBHOOK_SECRET = "whsec_test_secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["STRIPE_WEBHOOK_SECRET"] = WEBHOOK_SECRET
os.environ["STRIPE_SECRET_KEY"] = "sk_test_dummy"
os.environ.pop("ADMIN_API_TOKEN", None)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from weeklychef.database import Base, get_db  # noqa: E402
from weeklychef.domain.bookings.repository import BookingRepository  # noqa: E402
from weeklychef.domain.bookings.service import CheckoutSettings, get_checkout_settings  # noqa: E402
from weeklychef.domain.payments.stripe_service import (  # noqa: E402
    CheckoutSession,
    StripePaymentProvider,
    get_payment_provider,
)
from weeklychef.main import app  # noqa: E402
from weeklychef.models import Booking  # noqa: E402
from weeklychef.services.notification_service import (  # noqa: E402
    NotificationDispatcher,
    get_notification_dispatcher,
)

ORGANIZER_EMAIL = "chef@weeklyprivatechef.test"
ORGANIZER_PHONE = "+393330000000"


class FakePaymentProvider(StripePaymentProvider):
    """Real webhook verification, recorded checkout sessions"""

    def __init__(self):
        super().__init__(api_key="sk_test_dummy", webhook_secret=WEBHOOK_SECRET)
        self.sessions = []
        self.error = None

    async def create_checkout_session(self, **kwargs) -> CheckoutSession:
        if self.error:
            raise self.error
        self.sessions.append(kwargs)
        session_id = f"cs_test_{len(self.sessions)}"
        return CheckoutSession(id=session_id, url=f"https://checkout.stripe.com/c/pay/{session_id}")


class FakeEmailSender:
    def __init__(self):
        self.sent = []
        self.fail_for = set()
        self.raise_for = set()

    async def send_email(self, to, subject, mjml_content, from_address=None) -> bool:
        if to in self.raise_for:
            raise RuntimeError("resend exploded")
        if to in self.fail_for:
            return False
        self.sent.append({"to": to, "subject": subject, "from": from_address, "body": mjml_content})
        return True


class FakeMessenger:
    def __init__(self):
        self.sent = []
        self.fail_for = set()

    async def send_message(self, to_phone, body, channel="sms") -> bool:
        if to_phone in self.fail_for:
            return False
        self.sent.append({"to": to_phone, "body": body, "channel": channel})
        return True


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def payment_provider():
    return FakePaymentProvider()


@pytest.fixture
def email_sender():
    return FakeEmailSender()


@pytest.fixture
def messenger():
    return FakeMessenger()


@pytest.fixture
def dispatcher(email_sender, messenger):
    return NotificationDispatcher(
        email_sender=email_sender,
        messenger=messenger,
        organizer_email=ORGANIZER_EMAIL,
        organizer_phone=ORGANIZER_PHONE,
        system_from_address="System <system@weeklyprivatechef.test>",
    )


@pytest.fixture
def checkout_settings():
    return CheckoutSettings(site_url="https://chef.test")


@pytest.fixture
def client(session_factory, payment_provider, dispatcher, checkout_settings):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_provider] = lambda: payment_provider
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher
    app.dependency_overrides[get_checkout_settings] = lambda: checkout_settings
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def fetch_booking(session_factory):
    """Load a booking through a fresh session so no identity-map state leaks"""

    def _fetch(booking_id):
        db = session_factory()
        try:
            return db.query(Booking).filter(Booking.id == booking_id).first()
        finally:
            db.close()

    return _fetch


@pytest.fixture
def count_rows(session_factory):
    def _count(model=Booking):
        db = session_factory()
        try:
            return db.query(model).count()
        finally:
            db.close()

    return _count


@pytest.fixture
def pending_booking(db_session):
    booking = BookingRepository.create_booking(
        db_session,
        customer_name="Ana",
        customer_email="ana@example.com",
        customer_phone="333 123 4567",
        city="Milano",
        start_date=date(2026, 3, 2),
        end_date=date(2026, 3, 6),
        num_guests=4,
        plan="standard",
        add_saturday=False,
        add_sunday=False,
        total_price=250000,
        status="pending",
    )
    return booking.id


@pytest.fixture
def sign_payload():
    def _sign(payload: str, secret: str = WEBHOOK_SECRET, timestamp=None) -> str:
        timestamp = int(time.time()) if timestamp is None else timestamp
        signed = f"{timestamp}.{payload}".encode("utf-8")
        signature = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
        return f"t={timestamp},v1={signature}"

    return _sign


@pytest.fixture
def make_event():
    def _event(booking_id, event_type="checkout.session.completed", payment_intent="pi_test_123", event_id="evt_test_1"):
        metadata = {"booking_id": booking_id} if booking_id else {}
        return {
            "id": event_id,
            "object": "event",
            "type": event_type,
            "data": {
                "object": {
                    "id": "cs_test_1",
                    "object": "checkout.session",
                    "payment_intent": payment_intent,
                    "metadata": metadata,
                }
            },
        }

    return _event


@pytest.fixture
def post_webhook(client, sign_payload):
    def _post(event, signature=None):
        body = json.dumps(event)
        headers = {"content-type": "application/json"}
        headers["stripe-signature"] = signature if signature is not None else sign_payload(body)
        return client.post("/api/stripe-webhook", content=body, headers=headers)

    return _post

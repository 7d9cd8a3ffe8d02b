import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from .database import Base

BOOKING_STATUSES = ("pending", "confirmed", "cancelled")
QUOTE_STATUSES = ("pending", "contacted", "quoted", "converted", "declined")
PLAN_VALUES = ("standard", "plus", "premium", "custom")

MIN_GUESTS = 1
MAX_GUESTS = 50
QUOTE_MIN_GUESTS = 10


def generate_public_id():
    """Generate an opaque identifier; also used as the Stripe correlation token"""
    return str(uuid.uuid4())


def _in_clause(column: str, values: tuple) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint(
            f"num_guests >= {MIN_GUESTS} AND num_guests <= {MAX_GUESTS}",
            name="ck_bookings_num_guests",
        ),
        CheckConstraint(_in_clause("status", BOOKING_STATUSES), name="ck_bookings_status"),
        CheckConstraint(_in_clause("plan", PLAN_VALUES), name="ck_bookings_plan"),
        CheckConstraint("total_price >= 0", name="ck_bookings_total_price"),
    )

    id = Column(String(36), primary_key=True, default=generate_public_id)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_phone = Column(String(50), nullable=True)
    city = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)  # start + 4 days, +1 per weekend add-on
    num_guests = Column(Integer, nullable=False)
    plan = Column(String(20), nullable=False, default="standard")
    add_saturday = Column(Boolean, default=False, nullable=False)
    add_sunday = Column(Boolean, default=False, nullable=False)
    dietary_preferences = Column(Text, nullable=True)
    total_price = Column(Integer, nullable=False)  # EUR cents
    # Stripe references: session is set once at checkout, payment intent on confirmation
    stripe_session_id = Column(String(255), unique=True, nullable=True)
    stripe_payment_intent = Column(String(255), nullable=True)
    stripe_event_id = Column(String(255), nullable=True)
    status = Column(String(20), default="pending", nullable=False, index=True)
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    # Set by the single webhook delivery allowed to send confirmation notifications
    notifications_sent_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())


class QuoteRequest(Base):
    __tablename__ = "quote_requests"
    __table_args__ = (
        CheckConstraint(
            f"num_guests >= {QUOTE_MIN_GUESTS} AND num_guests <= {MAX_GUESTS}",
            name="ck_quote_requests_num_guests",
        ),
        CheckConstraint(_in_clause("status", QUOTE_STATUSES), name="ck_quote_requests_status"),
    )

    id = Column(String(36), primary_key=True, default=generate_public_id)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_phone = Column(String(50), nullable=True)
    city = Column(String(255), nullable=False)
    start_date = Column(Date, nullable=False)
    num_guests = Column(Integer, nullable=False)
    add_saturday = Column(Boolean, default=False, nullable=False)
    add_sunday = Column(Boolean, default=False, nullable=False)
    notes = Column(Text, default="", nullable=False)
    status = Column(String(20), default="pending", nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

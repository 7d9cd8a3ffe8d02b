"""Booking repository - Database operations for bookings"""

import logging
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ...exceptions import PersistenceError
from ...models import Booking

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def create_booking(db: Session, **booking_data) -> Booking:
        """Insert a new booking row"""
        try:
            booking = Booking(**booking_data)
            db.add(booking)
            db.commit()
            db.refresh(booking)
            return booking
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"❌ Failed to insert booking: {e}")
            raise PersistenceError(f"Failed to create booking: {e.__class__.__name__}") from e

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: str) -> Optional[Booking]:
        """Get a specific booking by ID"""
        try:
            return db.query(Booking).filter(Booking.id == booking_id).first()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to load booking: {e.__class__.__name__}") from e

    @staticmethod
    def get_latest_booking(db: Session) -> Optional[Booking]:
        """Most recently created booking"""
        try:
            return db.query(Booking).order_by(Booking.created_at.desc()).first()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to load booking: {e.__class__.__name__}") from e

    @staticmethod
    def _conditional_update(db: Session, criteria: tuple, values: dict) -> int:
        try:
            result = db.execute(
                update(Booking)
                .where(*criteria)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            db.commit()
            return result.rowcount
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError(f"Failed to update booking: {e.__class__.__name__}") from e

    @staticmethod
    def set_session_reference(db: Session, booking_id: str, session_id: str) -> bool:
        """Record the Stripe session; a reference already set is never replaced"""
        updated = BookingRepository._conditional_update(
            db,
            (Booking.id == booking_id, Booking.stripe_session_id.is_(None)),
            {"stripe_session_id": session_id},
        )
        return updated == 1

    @staticmethod
    def confirm_booking(
        db: Session, booking_id: str, payment_intent: Optional[str], event_id: Optional[str]
    ) -> bool:
        """
        pending -> confirmed. Returns False when no pending row matched, which
        covers duplicate deliveries, unknown ids and cancelled bookings.
        """
        updated = BookingRepository._conditional_update(
            db,
            (Booking.id == booking_id, Booking.status == "pending"),
            {
                "status": "confirmed",
                "stripe_payment_intent": payment_intent,
                "stripe_event_id": event_id,
                "confirmed_at": _utcnow(),
            },
        )
        return updated == 1

    @staticmethod
    def backfill_payment_intent(db: Session, booking_id: str, payment_intent: str) -> bool:
        """Fill a missing payment reference on an already confirmed booking"""
        updated = BookingRepository._conditional_update(
            db,
            (
                Booking.id == booking_id,
                Booking.status == "confirmed",
                Booking.stripe_payment_intent.is_(None),
            ),
            {"stripe_payment_intent": payment_intent},
        )
        return updated == 1

    @staticmethod
    def claim_notifications(db: Session, booking_id: str) -> bool:
        """
        Atomically mark confirmation notifications as sent. Only one caller
        per booking ever gets True.
        """
        updated = BookingRepository._conditional_update(
            db,
            (
                Booking.id == booking_id,
                Booking.status == "confirmed",
                Booking.notifications_sent_at.is_(None),
            ),
            {"notifications_sent_at": _utcnow()},
        )
        return updated == 1

"""
Stripe webhook reconciliation

received -> verified -> {ignored, applied} -> acknowledged

Only signature failures reach the caller (400). Everything after verification
degrades to an acknowledgement: Stripe retries any non-2xx response, and the
state transition it would re-run has already been applied.
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import PersistenceError
from ...services.notification_service import NotificationDispatcher
from ..bookings.repository import BookingRepository
from .stripe_service import StripePaymentProvider

logger = logging.getLogger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"

OUTCOME_IGNORED = "ignored"
OUTCOME_APPLIED = "applied"
OUTCOME_DUPLICATE = "duplicate"


def _payment_intent_id(session: dict) -> Optional[str]:
    payment_intent = session.get("payment_intent")
    if isinstance(payment_intent, dict):
        return payment_intent.get("id")
    return payment_intent


class WebhookService:
    """Applies verified Stripe events to bookings"""

    def __init__(
        self, db: Session, provider: StripePaymentProvider, dispatcher: NotificationDispatcher
    ):
        self.db = db
        self.provider = provider
        self.dispatcher = dispatcher
        self.repo = BookingRepository()

    async def handle(self, payload: bytes, signature_header: Optional[str]) -> str:
        """
        Verify and reconcile one delivery.

        Raises:
            WebhookSignatureError: the delivery could not be authenticated
        """
        event = self.provider.construct_event(payload, signature_header)
        event_id = event.get("id")
        event_type = event.get("type")

        if event_type != CHECKOUT_COMPLETED:
            logger.info(f"ℹ️ Unhandled event type: {event_type}")
            return OUTCOME_IGNORED

        data = event.get("data")
        session = data.get("object") if isinstance(data, dict) else None
        if not isinstance(session, dict):
            logger.warning(f"⚠️ Event {event_id} has no checkout session object")
            return OUTCOME_IGNORED

        metadata = session.get("metadata")
        booking_id = metadata.get("booking_id") if isinstance(metadata, dict) else None
        if not booking_id or not isinstance(booking_id, str):
            logger.warning(f"⚠️ No booking_id in metadata of session {session.get('id')} (event {event_id})")
            return OUTCOME_IGNORED

        try:
            outcome = self._apply_confirmation(booking_id, _payment_intent_id(session), event_id)
        except PersistenceError as e:
            logger.error(f"❌ Could not confirm booking {booking_id} for event {event_id}: {e}")
            return OUTCOME_IGNORED

        if outcome == OUTCOME_IGNORED:
            return outcome

        await self._notify_once(booking_id)
        return outcome

    def _apply_confirmation(
        self, booking_id: str, payment_intent: Optional[str], event_id: Optional[str]
    ) -> str:
        if self.repo.confirm_booking(self.db, booking_id, payment_intent, event_id):
            logger.info(f"✅ Booking {booking_id} confirmed (payment_intent={payment_intent})")
            return OUTCOME_APPLIED

        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if booking is None:
            logger.warning(f"⚠️ Event {event_id} references unknown booking {booking_id}")
            return OUTCOME_IGNORED

        if booking.status != "confirmed":
            logger.warning(
                f"⚠️ Payment received for booking {booking_id} in status {booking.status}; not confirming"
            )
            return OUTCOME_IGNORED

        if payment_intent and not booking.stripe_payment_intent:
            self.repo.backfill_payment_intent(self.db, booking_id, payment_intent)
        logger.info(f"ℹ️ Booking {booking_id} already confirmed (duplicate delivery {event_id})")
        return OUTCOME_DUPLICATE

    async def _notify_once(self, booking_id: str) -> None:
        """Send confirmation notifications unless another delivery already did"""
        try:
            if not self.repo.claim_notifications(self.db, booking_id):
                logger.info(f"ℹ️ Notifications for booking {booking_id} already sent")
                return
            booking = self.repo.get_booking_by_id(self.db, booking_id)
        except PersistenceError as e:
            logger.error(f"❌ Could not prepare notifications for booking {booking_id}: {e}")
            return

        if booking is None:
            return

        try:
            report = await self.dispatcher.send_booking_confirmation(booking)
        except Exception as e:
            logger.error(f"❌ Notification dispatch for booking {booking_id} failed: {e}", exc_info=True)
            return
        logger.info(f"📨 Booking {booking_id} notifications: {report.details()}")

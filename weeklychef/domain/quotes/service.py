"""Quote service - Custom inquiries for large groups"""

import logging

from sqlalchemy.orm import Session

from ...models import QuoteRequest
from ...services.notification_service import NotificationDispatcher
from .repository import QuoteRepository
from .schemas import QuoteRequestCreate

logger = logging.getLogger(__name__)


class QuoteService:
    def __init__(self, db: Session, dispatcher: NotificationDispatcher):
        self.db = db
        self.dispatcher = dispatcher
        self.repo = QuoteRepository()

    async def submit_quote_request(self, payload: dict) -> QuoteRequest:
        """Persist a pending quote request, then notify customer and organizer"""
        data = QuoteRequestCreate.from_payload(payload)

        logger.info(f"📥 Quote request from {data.customer_email} for {data.num_guests} guests")
        quote = self.repo.create_quote_request(
            self.db,
            customer_name=data.customer_name,
            customer_email=data.customer_email,
            customer_phone=data.customer_phone or None,
            city=data.city,
            start_date=data.start_date,
            num_guests=data.num_guests,
            add_saturday=data.add_saturday,
            add_sunday=data.add_sunday,
            notes=data.notes,
            status="pending",
        )

        try:
            await self.dispatcher.send_quote_received(quote)
        except Exception as e:
            logger.error(f"❌ Quote notifications for {quote.id} failed: {e}", exc_info=True)

        return quote

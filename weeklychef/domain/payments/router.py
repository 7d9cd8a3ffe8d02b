"""Payments router - Stripe webhook endpoint"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...database import get_db
from ...services.notification_service import NotificationDispatcher, get_notification_dispatcher
from .stripe_service import StripePaymentProvider, get_payment_provider
from .webhook_service import WebhookService

logger = logging.getLogger(__name__)

webhooks_router = APIRouter(prefix="/api", tags=["Webhooks"])


def get_webhook_service(
    db: Session = Depends(get_db),
    provider: StripePaymentProvider = Depends(get_payment_provider),
    dispatcher: NotificationDispatcher = Depends(get_notification_dispatcher),
) -> WebhookService:
    """Dependency injection for WebhookService"""
    return WebhookService(db, provider, dispatcher)


@webhooks_router.post("/stripe-webhook")
async def handle_stripe_webhook(
    request: Request,
    service: WebhookService = Depends(get_webhook_service),
):
    """
    Stripe webhook receiver.

    The raw body is read before any parsing; the signature covers the exact bytes.
    """
    payload = await request.body()
    signature = request.headers.get("stripe-signature")
    logger.info(f"📥 Stripe webhook received ({len(payload)} bytes)")

    outcome = await service.handle(payload, signature)
    logger.info(f"Stripe webhook acknowledged: {outcome}")
    return {"received": True}

"""Stripe service - Checkout sessions and webhook verification"""

import logging
from dataclasses import dataclass
from typing import Optional

import stripe

from ... import config
from ...exceptions import ProviderError
from ...webhook_security import verify_stripe_webhook

logger = logging.getLogger(__name__)

CHEF_IMAGE_URL = (
    "https://images.unsplash.com/photo-1556910103-1c02745a30bf?auto=format&fit=crop&w=1600&q=80"
)


@dataclass(frozen=True)
class CheckoutSession:
    id: str
    url: str


class StripePaymentProvider:
    """Service for Stripe API operations, configured per instance (no global api_key)"""

    def __init__(
        self,
        api_key: Optional[str],
        webhook_secret: Optional[str],
        currency: str = "eur",
        webhook_tolerance: int = 300,
    ):
        self.api_key = api_key
        self.webhook_secret = webhook_secret
        self.currency = currency
        self.webhook_tolerance = webhook_tolerance

        if not self.api_key:
            logger.warning("STRIPE_SECRET_KEY not set; checkout will fail until configured")

    async def create_checkout_session(
        self,
        booking_id: str,
        amount: int,
        product_name: str,
        description: str,
        customer_email: str,
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """
        Create a hosted Stripe Checkout session for one booking.

        booking_id is embedded in metadata as the correlation token the
        webhook uses to find the booking again.
        """
        if not self.api_key:
            raise ProviderError("Payment provider not configured")

        try:
            session = await stripe.checkout.Session.create_async(
                api_key=self.api_key,
                payment_method_types=["card"],
                line_items=[
                    {
                        "price_data": {
                            "currency": self.currency,
                            "product_data": {
                                "name": product_name,
                                "description": description,
                                "images": [CHEF_IMAGE_URL],
                            },
                            "unit_amount": amount,
                        },
                        "quantity": 1,
                    }
                ],
                mode="payment",
                success_url=success_url,
                cancel_url=cancel_url,
                customer_email=customer_email,
                metadata={"booking_id": booking_id},
            )
        except stripe.StripeError as e:
            logger.error(f"❌ Stripe checkout session creation failed for booking {booking_id}: {e}")
            raise ProviderError(f"Failed to create checkout session: {e.user_message or str(e)}") from e

        logger.info(f"✅ Stripe checkout session {session.id} created for booking {booking_id}")
        return CheckoutSession(id=session.id, url=session.url)

    def construct_event(self, payload: bytes, signature_header: Optional[str]) -> dict:
        return verify_stripe_webhook(
            payload, signature_header, self.webhook_secret, tolerance=self.webhook_tolerance
        )


def get_payment_provider() -> StripePaymentProvider:
    """Dependency injection for StripePaymentProvider"""
    return StripePaymentProvider(
        api_key=config.STRIPE_SECRET_KEY,
        webhook_secret=config.STRIPE_WEBHOOK_SECRET,
        currency=config.STRIPE_CURRENCY,
        webhook_tolerance=config.STRIPE_WEBHOOK_TOLERANCE,
    )

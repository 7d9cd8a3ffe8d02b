"""Booking router - FastAPI endpoints for checkout"""

import logging

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from ...auth import require_admin_token
from ...database import get_db
from ...shared.request_parsing import read_payload
from ..payments.stripe_service import StripePaymentProvider, get_payment_provider
from .schemas import CheckoutResponse, LatestBookingResponse
from .service import BookingService, CheckoutService, CheckoutSettings, get_checkout_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Bookings"])


def get_checkout_service(
    db: Session = Depends(get_db),
    provider: StripePaymentProvider = Depends(get_payment_provider),
    settings: CheckoutSettings = Depends(get_checkout_settings),
) -> CheckoutService:
    """Dependency injection for CheckoutService"""
    return CheckoutService(db, provider, settings)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


@router.post("/create-checkout-session", response_model=CheckoutResponse)
async def create_checkout_session(
    request: Request,
    service: CheckoutService = Depends(get_checkout_service),
):
    """Create a pending booking and return the Stripe checkout URL"""
    payload = await read_payload(request)
    url = await service.create_checkout(payload)
    return CheckoutResponse(url=url)


@router.get(
    "/get-latest-booking",
    response_model=LatestBookingResponse,
    dependencies=[Depends(require_admin_token)],
)
async def get_latest_booking(service: BookingService = Depends(get_booking_service)):
    """Most recent booking, used when testing the payment flow end to end"""
    return service.get_latest_booking()

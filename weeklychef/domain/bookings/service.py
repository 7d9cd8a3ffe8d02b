"""Checkout service - Creates pending bookings and their Stripe checkout sessions"""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from ... import config
from ...exceptions import NotFoundError, PersistenceError, UnrecognizedPlanError, ValidationError
from ...models import Booking
from ...pricing import (
    PLAN_INDEX,
    PLANS,
    Plan,
    end_date_for,
    format_price,
    parse_plan,
    plan_display_name,
    price_for,
    resolve_plan,
)
from ..payments.stripe_service import StripePaymentProvider
from .repository import BookingRepository
from .schemas import CheckoutRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutSettings:
    site_url: str
    price_check_enabled: bool = True
    price_tolerance_cents: int = 0
    strict_plan_parsing: bool = False

    @property
    def success_url(self) -> str:
        return f"{self.site_url}/confirmation?session_id={{CHECKOUT_SESSION_ID}}"

    @property
    def cancel_url(self) -> str:
        return f"{self.site_url}/booking"


def get_checkout_settings() -> CheckoutSettings:
    return CheckoutSettings(
        site_url=config.PUBLIC_SITE_URL,
        price_check_enabled=config.PRICE_CHECK_ENABLED,
        price_tolerance_cents=config.PRICE_TOLERANCE_CENTS,
        strict_plan_parsing=config.STRICT_PLAN_PARSING,
    )


class CheckoutService:
    """Service layer for booking checkout"""

    def __init__(self, db: Session, provider: StripePaymentProvider, settings: CheckoutSettings):
        self.db = db
        self.provider = provider
        self.settings = settings
        self.repo = BookingRepository()

    def resolve_plan(self, raw_plan, num_guests: int) -> Plan:
        try:
            return parse_plan(raw_plan)
        except UnrecognizedPlanError:
            if self.settings.strict_plan_parsing:
                raise
            fallback = resolve_plan(num_guests)
            logger.warning(f"⚠️ Unrecognized plan {raw_plan!r}, falling back to {fallback.value}")
            return fallback

    def check_guests(self, plan: Plan, num_guests: int) -> None:
        """A fixed plan only covers its own guest range; custom starts above the largest plan"""
        largest = PLANS[PLAN_INDEX[-1]]
        if plan is Plan.CUSTOM:
            if num_guests <= largest.max_guests:
                raise ValidationError(
                    f"Custom experience requires more than {largest.max_guests} guests"
                )
            return

        pricing = PLANS[plan]
        if not pricing.min_guests <= num_guests <= pricing.max_guests:
            message = f"The {plan.value} plan covers {pricing.min_guests}-{pricing.max_guests} guests"
            if PLANS[PLAN_INDEX[0]].min_guests <= num_guests <= largest.max_guests:
                message += f"; {num_guests} guests need the {resolve_plan(num_guests).value} plan"
            logger.warning(f"⚠️ Guest count {num_guests} does not fit plan {plan.value}")
            raise ValidationError(message)

    def check_price(self, plan: Plan, request: CheckoutRequest) -> None:
        """Reject client totals that disagree with the price table"""
        if not self.settings.price_check_enabled:
            return

        if plan is Plan.CUSTOM:
            # Never cheaper than the largest fixed plan with the same add-ons
            floor = price_for(PLAN_INDEX[-1], request.add_saturday, request.add_sunday)
            if request.total_price < floor:
                logger.warning(f"⚠️ Custom total {request.total_price} below floor {floor}")
                raise ValidationError(
                    f"Total price is below the minimum for a custom experience ({format_price(floor)})"
                )
            return

        expected = price_for(plan, request.add_saturday, request.add_sunday)
        if abs(request.total_price - expected) > self.settings.price_tolerance_cents:
            logger.warning(
                f"⚠️ Price mismatch for {plan.value}: client sent {request.total_price}, expected {expected}"
            )
            raise ValidationError(
                f"Total price does not match the selected plan (expected {format_price(expected)})"
            )

    async def create_checkout(self, payload: dict) -> str:
        """
        Validate, persist a pending booking, open a Stripe checkout session.

        Returns:
            The Stripe-hosted checkout URL
        """
        request = CheckoutRequest.from_payload(payload)
        plan = self.resolve_plan(request.plan, request.num_guests)
        self.check_guests(plan, request.num_guests)
        self.check_price(plan, request)
        end_date = end_date_for(request.start_date, request.add_saturday, request.add_sunday)

        logger.info(f"📥 Creating booking for {request.customer_email} ({plan.value}, {request.city})")
        booking = self.repo.create_booking(
            self.db,
            customer_name=request.customer_name,
            customer_email=request.customer_email,
            customer_phone=request.customer_phone,
            city=request.city,
            start_date=request.start_date,
            end_date=end_date,
            num_guests=request.num_guests,
            plan=plan.value,
            add_saturday=request.add_saturday,
            add_sunday=request.add_sunday,
            dietary_preferences=request.dietary_preferences,
            total_price=request.total_price,
            status="pending",
        )
        booking_id = booking.id

        session = await self.provider.create_checkout_session(
            booking_id=booking_id,
            amount=request.total_price,
            product_name=f"{plan_display_name(plan)} - Weekly Private Chef",
            description=(
                f"{request.num_guests} guests • {request.city} • Starts {request.start_date.isoformat()}"
            ),
            customer_email=request.customer_email,
            success_url=self.settings.success_url,
            cancel_url=self.settings.cancel_url,
        )

        # The session exists at Stripe whatever happens here; the webhook only needs metadata
        try:
            if not self.repo.set_session_reference(self.db, booking_id, session.id):
                logger.warning(f"⚠️ Booking {booking_id} already had a session reference")
        except PersistenceError as e:
            logger.error(f"❌ Could not store session {session.id} on booking {booking_id}: {e}")

        logger.info(f"✅ Checkout ready for booking {booking_id}")
        return session.url


class BookingService:
    """Read access for the admin endpoints"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = BookingRepository()

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def get_latest_booking(self) -> Booking:
        booking = self.repo.get_latest_booking(self.db)
        if not booking:
            raise NotFoundError("No bookings yet")
        return booking

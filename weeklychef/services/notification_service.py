"""
Unified Notification Service
Fans booking, quote and recruitment events out to email and WhatsApp/SMS for the customer
and the organizer. Every channel runs as its own task: one failing channel
never blocks or cancels another.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import date
from typing import Awaitable, Callable, Optional

from .. import config
from ..email_service import ResendEmailSender, get_email_sender
from ..email_templates import (
    booking_confirmed_customer_template,
    booking_confirmed_organizer_template,
    quote_received_customer_template,
    quote_received_organizer_template,
    recruitment_candidate_template,
    recruitment_organizer_template,
)
from ..domain.recruitment.schemas import RecruitmentApplication
from ..exceptions import NotificationError
from ..models import Booking, QuoteRequest
from ..pricing import end_date_for, format_price, plan_display_name
from .twilio_service import CHANNEL_SMS, CHANNEL_WHATSAPP, TwilioMessenger, get_twilio_messenger

logger = logging.getLogger(__name__)

STATUS_SENT = "sent"
STATUS_FAILED = "failed"
STATUS_SKIPPED = "skipped"


@dataclass
class ChannelResult:
    channel: str
    recipient: Optional[str]
    status: str
    error: Optional[str] = None


@dataclass
class DispatchReport:
    results: list[ChannelResult]

    @property
    def all_delivered(self) -> bool:
        return all(r.status != STATUS_FAILED for r in self.results)

    def details(self) -> dict:
        return {r.channel: r.status for r in self.results}


def booking_end_date(booking: Booking) -> date:
    """Persisted end date, or the one derived from the add-ons for older rows"""
    if booking.end_date:
        return booking.end_date
    return end_date_for(booking.start_date, booking.add_saturday, booking.add_sunday)


class NotificationDispatcher:
    def __init__(
        self,
        email_sender: ResendEmailSender,
        messenger: TwilioMessenger,
        organizer_email: Optional[str],
        organizer_phone: Optional[str],
        system_from_address: Optional[str] = None,
        customer_channel: str = CHANNEL_WHATSAPP,
    ):
        self.email_sender = email_sender
        self.messenger = messenger
        self.organizer_email = organizer_email
        self.organizer_phone = organizer_phone
        self.system_from_address = system_from_address
        self.customer_channel = (
            customer_channel if customer_channel in (CHANNEL_SMS, CHANNEL_WHATSAPP) else CHANNEL_WHATSAPP
        )

    async def _attempt(
        self, channel: str, recipient: Optional[str], send: Callable[[], Awaitable[bool]]
    ) -> ChannelResult:
        if not recipient:
            logger.debug(f"ℹ️ {channel} skipped: no recipient")
            return ChannelResult(channel, None, STATUS_SKIPPED)

        try:
            if not await send():
                raise NotificationError(f"{channel} delivery to {recipient} failed")
            logger.info(f"✅ {channel} sent to {recipient}")
            return ChannelResult(channel, recipient, STATUS_SENT)
        except NotificationError as e:
            logger.warning(f"⚠️ {e}")
            return ChannelResult(channel, recipient, STATUS_FAILED, str(e))
        except Exception as e:
            logger.error(f"❌ {channel} to {recipient} raised: {e}", exc_info=True)
            return ChannelResult(channel, recipient, STATUS_FAILED, str(e))

    async def _gather(self, attempts: list[Awaitable[ChannelResult]]) -> DispatchReport:
        results = await asyncio.gather(*attempts)
        report = DispatchReport(list(results))
        if not report.all_delivered:
            logger.warning(f"⚠️ Some notifications failed: {report.details()}")
        return report

    async def send_booking_confirmation(self, booking: Booking) -> DispatchReport:
        """Customer + organizer notifications for a paid booking"""
        end_date = booking_end_date(booking)
        amount = format_price(booking.total_price)
        plan_name = plan_display_name(booking.plan)

        customer_mjml = booking_confirmed_customer_template(
            customer_name=booking.customer_name,
            booking_ref=booking.id,
            plan_name=plan_name,
            city=booking.city,
            start_date=booking.start_date.isoformat(),
            end_date=end_date.isoformat(),
            num_guests=booking.num_guests,
            total_paid=amount,
        )
        organizer_mjml = booking_confirmed_organizer_template(
            customer_name=booking.customer_name,
            customer_email=booking.customer_email,
            customer_phone=booking.customer_phone,
            booking_id=booking.id,
            plan_name=plan_name,
            city=booking.city,
            start_date=booking.start_date.isoformat(),
            end_date=end_date.isoformat(),
            num_guests=booking.num_guests,
            amount=amount,
            dietary_preferences=booking.dietary_preferences,
        )
        customer_text = (
            f"Dear {booking.customer_name}, your private chef booking in {booking.city} "
            f"({booking.start_date.isoformat()} to {end_date.isoformat()}) is confirmed! "
            f"Our team will be in touch shortly."
        )
        organizer_text = (
            f"[NEW BOOKING] Booking paid - {booking.customer_name}. Total: {amount}. "
            f"Plan: {booking.plan}. {booking.city}, {booking.start_date.isoformat()}, "
            f"{booking.num_guests} guests."
        )

        logger.info(f"📨 Dispatching confirmation notifications for booking {booking.id}")
        return await self._gather(
            [
                self._attempt(
                    "customer_email",
                    booking.customer_email,
                    lambda: self.email_sender.send_email(
                        to=booking.customer_email,
                        subject="Booking Confirmation - Private Chef Service",
                        mjml_content=customer_mjml,
                    ),
                ),
                self._attempt(
                    "organizer_email",
                    self.organizer_email,
                    lambda: self.email_sender.send_email(
                        to=self.organizer_email,
                        subject=f"[NEW BOOKING] {booking.customer_name} - {amount}",
                        mjml_content=organizer_mjml,
                        from_address=self.system_from_address,
                    ),
                ),
                self._attempt(
                    f"customer_{self.customer_channel}",
                    booking.customer_phone,
                    lambda: self.messenger.send_message(
                        booking.customer_phone, customer_text, self.customer_channel
                    ),
                ),
                self._attempt(
                    "organizer_whatsapp",
                    self.organizer_phone,
                    lambda: self.messenger.send_message(
                        self.organizer_phone, organizer_text, CHANNEL_WHATSAPP
                    ),
                ),
            ]
        )

    async def send_quote_received(self, quote: QuoteRequest) -> DispatchReport:
        """Acknowledge a custom quote request and alert the organizer"""
        weekend = ", ".join(
            day for day, wanted in (("Saturday", quote.add_saturday), ("Sunday", quote.add_sunday)) if wanted
        ) or "None"

        customer_mjml = quote_received_customer_template(
            customer_name=quote.customer_name,
            city=quote.city,
            start_date=quote.start_date.isoformat(),
            num_guests=quote.num_guests,
        )
        organizer_mjml = quote_received_organizer_template(
            customer_name=quote.customer_name,
            customer_email=quote.customer_email,
            customer_phone=quote.customer_phone,
            city=quote.city,
            start_date=quote.start_date.isoformat(),
            num_guests=quote.num_guests,
            weekend=weekend,
            notes=quote.notes,
        )
        organizer_text = (
            f"[NEW QUOTE] {quote.customer_name} - {quote.city}, {quote.num_guests} guests, "
            f"from {quote.start_date.isoformat()}. {quote.customer_email}"
        )

        logger.info(f"📨 Dispatching quote notifications for request {quote.id}")
        return await self._gather(
            [
                self._attempt(
                    "customer_email",
                    quote.customer_email,
                    lambda: self.email_sender.send_email(
                        to=quote.customer_email,
                        subject="We received your Private Chef Quote Request",
                        mjml_content=customer_mjml,
                    ),
                ),
                self._attempt(
                    "organizer_email",
                    self.organizer_email,
                    lambda: self.email_sender.send_email(
                        to=self.organizer_email,
                        subject=f"[NEW QUOTE] {quote.customer_name} - {quote.city}",
                        mjml_content=organizer_mjml,
                        from_address=self.system_from_address,
                    ),
                ),
                self._attempt(
                    "organizer_whatsapp",
                    self.organizer_phone,
                    lambda: self.messenger.send_message(
                        self.organizer_phone, organizer_text, CHANNEL_WHATSAPP
                    ),
                ),
            ]
        )

    async def send_recruitment_received(self, application: RecruitmentApplication) -> DispatchReport:
        """Thank the candidate and alert the organizer about a staff application"""
        city = application.city or "N/A"
        candidate_mjml = recruitment_candidate_template(
            first_name=application.first_name, role=application.role, city=application.city
        )
        organizer_mjml = recruitment_organizer_template(
            full_name=application.full_name,
            email=application.email,
            phone=application.phone,
            role=application.role,
            city=application.city,
        )
        candidate_text = (
            f"Hi {application.first_name}, thank you for applying as {application.role}. "
            f"We have received your details and will be in touch soon!"
        )
        organizer_text = (
            f"🔔 New application! {application.full_name} applied as {application.role} in {city}. "
            f"Check the admin panel."
        )

        logger.info(f"📨 Dispatching recruitment notifications for {application.email}")
        return await self._gather(
            [
                self._attempt(
                    "candidate_email",
                    application.email,
                    lambda: self.email_sender.send_email(
                        to=application.email,
                        subject="Application received - Weekly Private Chef",
                        mjml_content=candidate_mjml,
                    ),
                ),
                self._attempt(
                    "candidate_whatsapp",
                    application.phone,
                    lambda: self.messenger.send_message(
                        application.phone, candidate_text, CHANNEL_WHATSAPP
                    ),
                ),
                self._attempt(
                    "organizer_email",
                    self.organizer_email,
                    lambda: self.email_sender.send_email(
                        to=self.organizer_email,
                        subject=f"New Application: {application.full_name} ({application.role})",
                        mjml_content=organizer_mjml,
                        from_address=self.system_from_address,
                    ),
                ),
                self._attempt(
                    "organizer_whatsapp",
                    self.organizer_phone,
                    lambda: self.messenger.send_message(
                        self.organizer_phone, organizer_text, CHANNEL_WHATSAPP
                    ),
                ),
            ]
        )

    async def send_test_message(self) -> DispatchReport:
        return await self._gather(
            [
                self._attempt(
                    "organizer_whatsapp",
                    self.organizer_phone,
                    lambda: self.messenger.send_message(
                        self.organizer_phone,
                        "Test notification: the booking system is working!",
                        CHANNEL_WHATSAPP,
                    ),
                )
            ]
        )


def get_notification_dispatcher() -> NotificationDispatcher:
    """Dependency injection for NotificationDispatcher"""
    return NotificationDispatcher(
        email_sender=get_email_sender(),
        messenger=get_twilio_messenger(),
        organizer_email=config.ORGANIZER_EMAIL,
        organizer_phone=config.ORGANIZER_PHONE,
        system_from_address=config.EMAIL_SYSTEM_ADDRESS,
        customer_channel=config.CUSTOMER_MESSAGE_CHANNEL,
    )

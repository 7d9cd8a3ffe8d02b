"""
Twilio Messaging Service
Sends SMS and WhatsApp messages through the Twilio Messages REST API
"""

import logging
from typing import Optional

import httpx

from .. import config
from ..shared.validators import to_international, to_whatsapp_address

logger = logging.getLogger(__name__)

TWILIO_API_BASE = "https://api.twilio.com/2010-04-01"

CHANNEL_SMS = "sms"
CHANNEL_WHATSAPP = "whatsapp"


class TwilioMessenger:
    """Fire-and-forget messaging; every failure is reported as False, never raised"""

    def __init__(
        self,
        account_sid: Optional[str],
        auth_token: Optional[str],
        sms_from: Optional[str] = None,
        whatsapp_from: Optional[str] = None,
        default_country_code: str = "+39",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.account_sid = account_sid
        self.auth_token = auth_token
        self.sms_from = sms_from
        self.whatsapp_from = whatsapp_from
        self.default_country_code = default_country_code
        self.timeout = timeout
        self._transport = transport

        if not self.is_available():
            logger.warning("Twilio credentials missing. Messaging will be disabled.")

    def is_available(self) -> bool:
        return bool(self.account_sid and self.auth_token)

    def format_recipient(self, to_phone: str, channel: str) -> Optional[str]:
        if channel == CHANNEL_WHATSAPP:
            return to_whatsapp_address(to_phone, self.default_country_code)
        return to_international(to_phone, self.default_country_code)

    def _sender_for(self, channel: str) -> Optional[str]:
        if channel == CHANNEL_WHATSAPP:
            sender = self.whatsapp_from
            if sender and not sender.startswith("whatsapp:"):
                sender = to_whatsapp_address(sender, self.default_country_code)
            return sender
        return self.sms_from

    async def send_message(self, to_phone: str, body: str, channel: str = CHANNEL_SMS) -> bool:
        """
        Send a message via Twilio

        Args:
            to_phone: Recipient phone number, any common format
            body: Message content
            channel: "sms" or "whatsapp"

        Returns:
            True if Twilio accepted the message
        """
        if not self.is_available():
            logger.warning("Twilio client not initialized.")
            return False

        recipient = self.format_recipient(to_phone, channel)
        if not recipient:
            logger.warning(f"⚠️ Invalid phone number for {channel}: {to_phone!r}")
            return False

        sender = self._sender_for(channel)
        if not sender:
            logger.warning(f"Twilio 'From' number for {channel} not configured.")
            return False

        try:
            logger.info(f"📱 Sending {channel.upper()} to {recipient}")
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.post(
                    f"{TWILIO_API_BASE}/Accounts/{self.account_sid}/Messages.json",
                    auth=(self.account_sid, self.auth_token),
                    data={"To": recipient, "From": sender, "Body": body},
                )

            if response.status_code in [200, 201]:
                message_sid = response.json().get("sid")
                logger.info(f"✅ {channel.upper()} sent successfully to {recipient} (SID: {message_sid})")
                return True

            try:
                error_data = response.json()
            except ValueError:
                error_data = {}
            error_message = error_data.get("message", "Unknown error")
            error_code = error_data.get("code")
            logger.error(f"❌ Twilio API error [{error_code}]: {error_message}")
            return False

        except httpx.HTTPError as e:
            logger.error(f"❌ Failed to send {channel}: {str(e)}")
            return False


def get_twilio_messenger() -> TwilioMessenger:
    return TwilioMessenger(
        account_sid=config.TWILIO_ACCOUNT_SID,
        auth_token=config.TWILIO_AUTH_TOKEN,
        sms_from=config.TWILIO_FROM_NUMBER,
        whatsapp_from=config.TWILIO_WHATSAPP_NUMBER,
        default_country_code=config.DEFAULT_COUNTRY_CODE,
    )

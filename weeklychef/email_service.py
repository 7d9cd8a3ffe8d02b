"""
Email Service using Resend
Templates are written in MJML and compiled to HTML before sending
"""

import asyncio
import logging
from typing import Optional, Union

import resend
from mjml import mjml_to_html

from . import config

logger = logging.getLogger(__name__)


def compile_mjml_to_html(mjml_content: str) -> str:
    """Compile MJML markup to HTML"""
    try:
        result = mjml_to_html(mjml_content)
        if isinstance(result, dict):
            if result.get("errors"):
                logger.warning(f"MJML compilation warnings: {result['errors']}")
            return result.get("html", "")
        return str(result)
    except Exception as e:
        logger.error(f"MJML compilation error: {e}")
        raise


class ResendEmailSender:
    """Sends one email per call; returns False instead of raising on any failure"""

    def __init__(self, api_key: Optional[str], default_from: str):
        self.api_key = api_key
        self.default_from = default_from

        if not self.api_key:
            logger.warning("RESEND_API_KEY is not defined. Emails will not be sent.")

    def is_available(self) -> bool:
        return bool(self.api_key)

    async def send_email(
        self,
        to: Union[str, list[str]],
        subject: str,
        mjml_content: str,
        from_address: Optional[str] = None,
    ) -> bool:
        """
        Send an email via Resend

        Args:
            to: Recipient email(s)
            subject: Email subject line
            mjml_content: MJML template content (compiled to HTML here)
            from_address: Optional sender, defaults to the configured address

        Returns:
            True if Resend accepted the email
        """
        if not self.is_available():
            logger.warning(f"⚠️ Email to {to} not sent: RESEND_API_KEY missing")
            return False

        recipients = [to] if isinstance(to, str) else to

        try:
            html_content = compile_mjml_to_html(mjml_content)
            email_data = {
                "from": from_address or self.default_from,
                "to": recipients,
                "subject": subject,
                "html": html_content,
            }

            logger.info(f"📧 Sending email via Resend to: {recipients}")
            # The Resend SDK reads its key from module state
            resend.api_key = self.api_key
            response = await asyncio.to_thread(resend.Emails.send, email_data)
            logger.info(f"✅ Email sent successfully via Resend: {response}")
            return True
        except Exception as e:
            logger.error(f"❌ Email send error to {recipients}: {e}")
            return False


def get_email_sender() -> ResendEmailSender:
    return ResendEmailSender(api_key=config.RESEND_API_KEY, default_from=config.EMAIL_FROM_ADDRESS)

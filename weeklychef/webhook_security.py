"""
Webhook Security Module

Signature verification for Stripe webhook deliveries. Verification is
delegated to the Stripe SDK, which checks the HMAC-SHA256 signature in
constant time and rejects timestamps outside the tolerance window (replay
protection). Every failure mode raises WebhookSignatureError before the
payload is interpreted.
"""

import json
import logging
from typing import Optional

import stripe

from .exceptions import WebhookSignatureError

logger = logging.getLogger(__name__)

# Maximum age of webhook in seconds (5 minutes)
MAX_WEBHOOK_AGE_SECONDS = 300


def verify_stripe_webhook(
    payload: bytes,
    signature_header: Optional[str],
    secret: Optional[str],
    tolerance: int = MAX_WEBHOOK_AGE_SECONDS,
) -> dict:
    """
    Verify a Stripe webhook and decode its event.

    Args:
        payload: Raw request body, exactly as received
        signature_header: Value of the Stripe-Signature header
        secret: Endpoint signing secret (whsec_...)
        tolerance: Maximum accepted age of the signed timestamp

    Returns:
        The decoded event as a plain dict

    Raises:
        WebhookSignatureError: missing header/secret, bad signature, or undecodable body
    """
    if not secret:
        logger.error("❌ STRIPE_WEBHOOK_SECRET not configured, rejecting webhook")
        raise WebhookSignatureError("Webhook secret not configured")

    if not signature_header:
        logger.error("❌ Missing Stripe-Signature header")
        raise WebhookSignatureError("Webhook signature missing")

    try:
        body = payload.decode("utf-8")
    except UnicodeDecodeError:
        logger.error("❌ Webhook body is not valid UTF-8")
        raise WebhookSignatureError("Webhook signature verification failed") from None

    try:
        stripe.WebhookSignature.verify_header(body, signature_header, secret, tolerance)
    except stripe.SignatureVerificationError as e:
        logger.warning(f"🚫 Stripe signature verification failed: {e}")
        raise WebhookSignatureError("Webhook signature verification failed") from None

    try:
        event = json.loads(body)
    except json.JSONDecodeError:
        logger.error("❌ Verified webhook body is not valid JSON")
        raise WebhookSignatureError("Invalid webhook payload") from None

    if not isinstance(event, dict):
        raise WebhookSignatureError("Invalid webhook payload")

    logger.info(f"✅ Stripe webhook verified: id={event.get('id')} type={event.get('type')}")
    return event

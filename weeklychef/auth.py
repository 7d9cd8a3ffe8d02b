import hmac
import logging
from typing import Optional

from fastapi import Header

from . import config
from .exceptions import UnauthorizedError

logger = logging.getLogger(__name__)


def constant_time_compare(a: str, b: str) -> bool:
    if not a or not b:
        return False
    return hmac.compare_digest(a, b)


async def require_admin_token(x_admin_token: Optional[str] = Header(None)) -> None:
    """Guard for the manual repair/test endpoints"""
    expected = config.ADMIN_API_TOKEN
    if not expected:
        logger.warning("⚠️ ADMIN_API_TOKEN not set - admin endpoints are unprotected")
        return

    if not constant_time_compare(x_admin_token or "", expected):
        logger.warning("🚫 Admin endpoint called with a missing or invalid X-Admin-Token")
        raise UnauthorizedError("Invalid admin token")

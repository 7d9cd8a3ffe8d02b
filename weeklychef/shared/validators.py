"""Shared validation utilities"""

import re
from typing import Optional

WHATSAPP_PREFIX = "whatsapp:"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    # Basic email validation pattern
    email_pattern = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"

    if not re.match(email_pattern, email):
        raise ValueError("Invalid email format")

    return email


def to_international(phone: Optional[str], default_country_code: str = "+39") -> Optional[str]:
    """
    Normalize a phone number to +<digits>.

    A leading "00" is read as the international prefix. Numbers without any
    prefix are assumed to belong to default_country_code, which is wrong for
    foreign numbers typed without their country code.
    """
    if not phone:
        return None

    number = phone.strip()
    if number.lower().startswith(WHATSAPP_PREFIX):
        number = number[len(WHATSAPP_PREFIX):].strip()

    has_plus = number.startswith("+")
    digits = re.sub(r"\D", "", number)
    if not digits:
        return None

    if has_plus:
        return f"+{digits}"
    if digits.startswith("00"):
        return f"+{digits[2:]}"

    country_digits = re.sub(r"\D", "", default_country_code)
    return f"+{country_digits}{digits}"


def to_whatsapp_address(phone: Optional[str], default_country_code: str = "+39") -> Optional[str]:
    """Strip any whatsapp: prefix, internationalize, then re-add the prefix"""
    number = to_international(phone, default_country_code)
    if not number:
        return None
    return f"{WHATSAPP_PREFIX}{number}"

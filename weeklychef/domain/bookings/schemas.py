"""Booking domain schemas - Pydantic models for validation"""

from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ...exceptions import ValidationError
from ...models import MAX_GUESTS, MIN_GUESTS
from ...shared.validators import validate_email

CHECKOUT_REQUIRED_FIELDS = (
    "customer_name",
    "customer_email",
    "city",
    "start_date",
    "num_guests",
    "plan",
)


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _first_error(exc: PydanticValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error.get("loc", ())) or "body"
    return f"Invalid {field}: {error.get('msg')}"


class CheckoutRequest(BaseModel):
    """Canonical checkout input, whatever the request encoding was"""

    model_config = ConfigDict(str_strip_whitespace=True)

    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    city: str
    start_date: date
    num_guests: int = Field(ge=MIN_GUESTS, le=MAX_GUESTS)
    plan: Union[int, str]
    add_saturday: bool = False
    add_sunday: bool = False
    dietary_preferences: Optional[str] = None
    total_price: int = Field(ge=0)

    @field_validator("customer_email")
    @classmethod
    def validate_customer_email(cls, v):
        return validate_email(v)

    @classmethod
    def from_payload(cls, payload: dict) -> "CheckoutRequest":
        """
        Build a request from a decoded body.

        Raises:
            ValidationError: required field absent/empty, total_price absent,
                or any field in the wrong format
        """
        missing = [name for name in CHECKOUT_REQUIRED_FIELDS if _is_blank(payload.get(name))]
        if missing or payload.get("total_price") is None:
            raise ValidationError("Missing required fields")

        # Optional fields sent as null/"" fall back to their defaults
        cleaned = {key: value for key, value in payload.items() if not _is_blank(value)}
        try:
            return cls.model_validate(cleaned)
        except PydanticValidationError as e:
            raise ValidationError(_first_error(e)) from None


class CheckoutResponse(BaseModel):
    url: str


class LatestBookingResponse(BaseModel):
    id: str
    customer_email: str
    total_price: int

    model_config = ConfigDict(from_attributes=True)


class ConfirmBookingRequest(BaseModel):
    booking_id: str

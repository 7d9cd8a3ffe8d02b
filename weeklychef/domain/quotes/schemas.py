"""Quote request schemas"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ...exceptions import ValidationError
from ...models import MAX_GUESTS, QUOTE_MIN_GUESTS
from ...shared.validators import validate_email

QUOTE_REQUIRED_FIELDS = ("customer_name", "customer_email", "city", "start_date", "num_guests")

INVALID_QUOTE_MESSAGE = "Missing required fields or invalid guest count"


class QuoteRequestCreate(BaseModel):
    """Custom quote inquiry for groups above the fixed plans"""

    model_config = ConfigDict(str_strip_whitespace=True)

    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    city: str
    start_date: date
    num_guests: int = Field(ge=QUOTE_MIN_GUESTS, le=MAX_GUESTS)
    add_saturday: bool = False
    add_sunday: bool = False
    notes: str = ""

    @field_validator("customer_email")
    @classmethod
    def validate_customer_email(cls, v):
        return validate_email(v)

    @classmethod
    def from_payload(cls, payload: dict) -> "QuoteRequestCreate":
        for name in QUOTE_REQUIRED_FIELDS:
            value = payload.get(name)
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError(INVALID_QUOTE_MESSAGE)

        cleaned = {key: value for key, value in payload.items() if value is not None}
        try:
            return cls.model_validate(cleaned)
        except PydanticValidationError as e:
            fields = {str(err.get("loc", ("",))[0]) for err in e.errors()}
            if "num_guests" in fields:
                raise ValidationError(INVALID_QUOTE_MESSAGE) from None
            raise ValidationError(f"Invalid {', '.join(sorted(fields))}") from None


class QuoteRequestResponse(BaseModel):
    success: bool
    id: str
    message: str

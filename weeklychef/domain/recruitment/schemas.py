"""Staff application schemas"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ...exceptions import ValidationError
from ...shared.validators import validate_email


class RecruitmentApplication(BaseModel):
    """Chef or waiter application sent from the careers page (camelCase or snake_case keys)"""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True)

    first_name: str = Field(alias="firstName", min_length=1)
    last_name: str = Field(default="", alias="lastName")
    email: str
    phone: Optional[str] = None
    role: str = "Staff"
    city: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_candidate_email(cls, v):
        return validate_email(v)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_payload(cls, payload: dict) -> "RecruitmentApplication":
        first_name = payload.get("firstName", payload.get("first_name"))
        email = payload.get("email")
        for value in (first_name, email):
            if value is None or (isinstance(value, str) and not value.strip()):
                raise ValidationError("Missing required fields")

        cleaned = {key: value for key, value in payload.items() if value not in (None, "")}
        try:
            return cls.model_validate(cleaned)
        except PydanticValidationError as e:
            fields = sorted({str(err.get("loc", ("",))[0]) for err in e.errors()})
            raise ValidationError(f"Invalid {', '.join(fields)}") from None

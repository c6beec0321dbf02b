from typing import List, Literal, Optional
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

VAN_TYPES = ("Small", "Medium", "Large")

VanType = Literal["Small", "Medium", "Large"]

class FieldError(BaseModel):
    field: str
    message: str

class NormalizedBooking(BaseModel):
    """A booking that passed validation and is ready for storage."""
    pickuplocation: str
    dropofflocation: str
    vantype: str
    deliverytime: datetime

class StoredBooking(NormalizedBooking):
    id: str

class ValidationResult(BaseModel):
    """
    Outcome of validating a raw payload.
    Either ok with a booking, or not ok with at least one error.
    """
    ok: bool
    booking: Optional[NormalizedBooking] = None
    errors: List[FieldError] = Field(default_factory=list)

    @classmethod
    def success(cls, booking: NormalizedBooking) -> "ValidationResult":
        return cls(ok=True, booking=booking)

    @classmethod
    def failure(cls, errors: List[FieldError]) -> "ValidationResult":
        return cls(ok=False, errors=errors)

class BookingDocument(BaseModel):
    """
    Storage-side schema of a booking.
    Checked on every insert regardless of what the request layer did.
    """
    model_config = {"strict": True, "extra": "forbid"}

    pickuplocation: str = Field(min_length=1)
    dropofflocation: str = Field(min_length=1)
    vantype: VanType
    deliverytime: datetime

    @field_validator("pickuplocation", "dropofflocation")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

# $jsonSchema installed on the Mongo collection, mirrors BookingDocument
BOOKING_JSON_SCHEMA = {
    "bsonType": "object",
    "required": ["pickuplocation", "dropofflocation", "vantype", "deliverytime"],
    "properties": {
        "pickuplocation": {"bsonType": "string", "minLength": 1},
        "dropofflocation": {"bsonType": "string", "minLength": 1},
        "vantype": {
            "enum": list(VAN_TYPES),
            "description": "VanType should be Medium, Large, or Small",
        },
        "deliverytime": {"bsonType": "date"},
    },
}

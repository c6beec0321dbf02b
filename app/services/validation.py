from typing import Any, Callable, List, Optional, Tuple
from datetime import datetime, timezone

from app.models.booking_models import (
    VAN_TYPES,
    FieldError,
    NormalizedBooking,
    ValidationResult,
)

PICKUP_REQUIRED = "Pickup location is required"
DROPOFF_REQUIRED = "Drop-off location is required"
PICKUP_NOT_TEXT = "Pickup location must be text"
DROPOFF_NOT_TEXT = "Drop-off location must be text"
VANTYPE_INVALID = "Van type must be Medium, Large, or Small"
DELIVERYTIME_INVALID = "Delivery time must be a valid date-time"

RuleOutcome = Tuple[Any, Optional[FieldError]]

def _required_text(field: str, required: str, not_text: str) -> Callable[[dict], RuleOutcome]:
    def rule(payload: dict) -> RuleOutcome:
        value = payload.get(field)
        if value is not None and not isinstance(value, str):
            return None, FieldError(field=field, message=not_text)
        if value is None or not value.strip():
            return None, FieldError(field=field, message=required)
        return value.strip(), None
    rule.__name__ = f"check_{field}"
    return rule

check_pickuplocation = _required_text("pickuplocation", PICKUP_REQUIRED, PICKUP_NOT_TEXT)
check_dropofflocation = _required_text("dropofflocation", DROPOFF_REQUIRED, DROPOFF_NOT_TEXT)

def check_vantype(payload: dict) -> RuleOutcome:
    value = payload.get("vantype")
    # Exact match, "medium" is rejected
    if not isinstance(value, str) or value not in VAN_TYPES:
        return None, FieldError(field="vantype", message=VANTYPE_INVALID)
    return value, None

def parse_iso_datetime(value: str) -> datetime:
    """
    Parses an ISO-8601 date or date-time into an aware UTC datetime.
    Values without an offset are taken as UTC.
    Raises ValueError when the string is not ISO-8601 or its UTC form
    falls outside the datetime range.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty date-time")
    if text[-1] in ("z", "Z"):
        text = text[:-1] + "+00:00"
    dt = datetime.fromisoformat(text)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    try:
        return dt.astimezone(timezone.utc)
    except OverflowError as e:
        raise ValueError(f"date-time out of range: {value}") from e

def check_deliverytime(payload: dict) -> RuleOutcome:
    value = payload.get("deliverytime")
    if not isinstance(value, str):
        return None, FieldError(field="deliverytime", message=DELIVERYTIME_INVALID)
    try:
        return parse_iso_datetime(value), None
    except (ValueError, OverflowError):
        return None, FieldError(field="deliverytime", message=DELIVERYTIME_INVALID)

# Order here is the order errors are reported in
RULES = (
    ("pickuplocation", check_pickuplocation),
    ("dropofflocation", check_dropofflocation),
    ("vantype", check_vantype),
    ("deliverytime", check_deliverytime),
)

def validate_booking(payload: Any) -> ValidationResult:
    """
    Runs every rule against the payload and collects all violations.
    Anything that is not a JSON object is validated as an empty one.
    """
    if not isinstance(payload, dict):
        payload = {}

    values = {}
    errors: List[FieldError] = []
    for field, rule in RULES:
        value, error = rule(payload)
        if error is not None:
            errors.append(error)
        else:
            values[field] = value

    if errors:
        return ValidationResult.failure(errors)
    return ValidationResult.success(NormalizedBooking(**values))

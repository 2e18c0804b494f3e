import re
from datetime import date, datetime

from inventory.services.errors import ErrorCode, ValidationError

_ISO_DAY = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# largest value a signed 64-bit INTEGER column holds
MAX_ID = 2 ** 63 - 1


def is_blank(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def require_fields(data: dict, *names: str):
    """Raise MISSING_FIELD for the first name absent (or blank) in data."""
    for name in names:
        if is_blank(data.get(name)):
            raise ValidationError(ErrorCode.MISSING_FIELD, f"Field '{name}' is required")


def positive_int(value, name: str) -> int:
    # bool is an int subclass; "true" ids are not ids
    if isinstance(value, bool):
        raise ValidationError(ErrorCode.INVALID_FIELD, f"Field '{name}' must be a positive integer")
    if isinstance(value, str) and value.strip().isdecimal():
        value = int(value.strip())
    if not isinstance(value, int) or value <= 0 or value > MAX_ID:
        raise ValidationError(ErrorCode.INVALID_FIELD, f"Field '{name}' must be a positive integer")
    return value


def parse_date(value, name: str, strict: bool = False) -> date:
    """
    Parse a calendar date.

    Lenient mode accepts date/datetime objects, ISO dates and ISO timestamps
    (truncated to the date). Strict mode only accepts 'YYYY-MM-DD' strings.
    """
    if not strict:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value

    if not isinstance(value, str):
        raise ValidationError(ErrorCode.INVALID_DATE_FORMAT, f"Invalid date format for {name}")

    text = value.strip()
    try:
        if _ISO_DAY.match(text):
            return date.fromisoformat(text)
        if strict:
            raise ValueError(text)
        # fromisoformat before 3.11 does not know the Z suffix
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text).date()
    except ValueError:
        if strict:
            raise ValidationError(
                ErrorCode.INVALID_DATE_FORMAT,
                f"Field '{name}' must be a valid date in YYYY-MM-DD format"
            )
        raise ValidationError(ErrorCode.INVALID_DATE_FORMAT, f"Invalid date format for {name}")


def check_date_order(start: date, end: date, start_name: str, end_name: str):
    if start > end:
        raise ValidationError(
            ErrorCode.INVALID_DATE_ORDER,
            f"'{start_name}' must be before or the same as '{end_name}'"
        )

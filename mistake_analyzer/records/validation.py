# ==============================================
# Validation
# ==============================================
#
# PURPOSE:
#   Guard every user-supplied field before it reaches the
#   classifier or the store. Each check either returns the
#   cleaned value or raises InvalidMistakeError naming the field.
#
# RULES:
# ------
# - description → required, 5..500 characters (trimmed)
# - date        → required, YYYY-MM-DD, not after "today"
# - severity    → required, low / medium / high (or display name)
# - resolution  → optional, trimmed, "" when missing
#
# FUNCTIONS:
# ----------
# - validate_description(description) -> str
# - validate_date(value, today=None) -> date
# - validate_severity(value) -> Severity
# - clean_resolution(resolution) -> str
#
# ==============================================

from datetime import date, datetime
from typing import Optional, Union

from mistake_analyzer.errors import InvalidMistakeError
from .mistake import DATE_FORMAT, Severity, parse_date


MIN_DESCRIPTION_LENGTH = 5
MAX_DESCRIPTION_LENGTH = 500


def validate_description(description: Optional[str]) -> str:
    """
    Check a mistake description.

    Args:
        description: Raw text from the user

    Returns:
        The description with surrounding whitespace removed

    Raises:
        InvalidMistakeError: if empty, shorter than 5 or longer than 500 characters
    """
    if description is None or not description.strip():
        raise InvalidMistakeError("Description cannot be empty", "description")

    cleaned = description.strip()
    if len(cleaned) < MIN_DESCRIPTION_LENGTH:
        raise InvalidMistakeError(
            f"Description must be at least {MIN_DESCRIPTION_LENGTH} characters", "description"
        )
    if len(description) > MAX_DESCRIPTION_LENGTH:
        raise InvalidMistakeError(
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters", "description"
        )
    return cleaned


def validate_date(value: Union[str, date, None], today: Optional[date] = None) -> date:
    """
    Check the date a mistake happened.

    Args:
        value: "YYYY-MM-DD" text, a date or a datetime
        today: Reference day for the future check. Defaults to date.today().

    Returns:
        The parsed date

    Raises:
        InvalidMistakeError: if missing, badly formatted, or in the future
    """
    today = today or date.today()

    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidMistakeError("Date cannot be empty", "date")

    if isinstance(value, datetime):
        parsed = value.date()
    elif isinstance(value, date):
        parsed = value
    else:
        try:
            parsed = parse_date(value)
        except ValueError:
            raise InvalidMistakeError(
                "Invalid date format. Please use yyyy-MM-dd (e.g., 2024-01-15)", "date"
            ) from None

    if parsed > today:
        raise InvalidMistakeError("Date cannot be in the future", "date")
    return parsed


def validate_severity(value: Union[str, Severity, None]) -> Severity:
    """
    Resolve the severity the user picked.

    Args:
        value: A Severity, its name ("high") or display name ("High Priority")

    Returns:
        The matching Severity

    Raises:
        InvalidMistakeError: if nothing was picked or the value is unknown
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidMistakeError("Severity must be selected", "severity")

    if isinstance(value, Severity):
        return value

    try:
        return Severity.parse(value)
    except ValueError:
        choices = ", ".join(severity.name.lower() for severity in Severity)
        raise InvalidMistakeError(
            f"Unknown severity {value!r} (choose one of: {choices})", "severity"
        ) from None


def clean_resolution(resolution: Optional[str]) -> str:
    """Trim an optional resolution; None becomes ""."""
    return resolution.strip() if resolution else ""


__all__ = [
    "DATE_FORMAT",
    "MIN_DESCRIPTION_LENGTH",
    "MAX_DESCRIPTION_LENGTH",
    "validate_description",
    "validate_date",
    "validate_severity",
    "clean_resolution",
]

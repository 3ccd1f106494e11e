# billy_bingo/core/validation.py
"""
Input validation rules for users and bingo cards.

Each ``validate_*`` function collects every problem it finds and raises a single
``ValidationError`` whose message joins them with ", ".
"""
import re
import uuid
from typing import Any, Iterable, Optional

from billy_bingo.core.errors import ValidationError
from billy_bingo.models.bingo_card import SQUARE_COUNT

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
NAME_RE = re.compile(r"^[a-zA-Z0-9]+$")

NAME_MIN, NAME_MAX = 2, 50
PASSWORD_MIN = 8
CARD_NAME_MAX = 100
CARD_DATE_MAX = 50
CARD_VENUE_MAX = 200
SQUARE_MAX = 200

NAME_MESSAGE = (
    f"Name must be between {NAME_MIN} and {NAME_MAX} characters and contain only letters and numbers"
)
EMAIL_MESSAGE = "Please provide a valid email address"
PASSWORD_MESSAGE = (
    f"Password must be at least {PASSWORD_MIN} characters and contain both letters and numbers"
)
CARD_NAME_MESSAGE = f"Card name must be between 1 and {CARD_NAME_MAX} characters"
SQUARES_MESSAGE = (
    f"Bingo card must have exactly {SQUARE_COUNT} squares, "
    f"each being a string with maximum {SQUARE_MAX} characters"
)


def is_present(value: Any) -> bool:
    return value is not None and str(value).strip() != ""


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email.strip()))


def is_valid_password(password: str) -> bool:
    if len(password) < PASSWORD_MIN:
        return False
    has_letter = any(c.isascii() and c.isalpha() for c in password)
    has_digit = any(c.isdigit() for c in password)
    return has_letter and has_digit


def is_valid_name(name: str) -> bool:
    name = name.strip()
    return NAME_MIN <= len(name) <= NAME_MAX and bool(NAME_RE.match(name))


def is_valid_card_name(name: Any) -> bool:
    if not isinstance(name, str):
        return False
    return 1 <= len(name.strip()) <= CARD_NAME_MAX


def is_valid_squares(squares: Any) -> bool:
    if not isinstance(squares, list) or len(squares) != SQUARE_COUNT:
        return False
    return all(isinstance(s, str) and len(s) <= SQUARE_MAX for s in squares)


def _raise_if(errors: Iterable[str]) -> None:
    errors = list(errors)
    if errors:
        raise ValidationError(", ".join(errors))


def validate_registration(name: Any, email: Any, password: Any) -> None:
    errors = []
    if not is_present(name):
        errors.append("Name is required")
    elif not is_valid_name(name):
        errors.append(NAME_MESSAGE)

    if not is_present(email):
        errors.append("Email is required")
    elif not is_valid_email(email):
        errors.append(EMAIL_MESSAGE)

    if not is_present(password):
        errors.append("Password is required")
    elif not is_valid_password(password):
        errors.append(PASSWORD_MESSAGE)
    _raise_if(errors)


def validate_user_update(changes: dict) -> None:
    """Validate a partial user payload; only keys present in ``changes`` are checked."""
    errors = []
    if "name" in changes and not (isinstance(changes["name"], str) and is_valid_name(changes["name"])):
        errors.append(NAME_MESSAGE)
    if "email" in changes and not (isinstance(changes["email"], str) and is_valid_email(changes["email"])):
        errors.append(EMAIL_MESSAGE)
    if "password" in changes and not (
        isinstance(changes["password"], str) and is_valid_password(changes["password"])
    ):
        errors.append(PASSWORD_MESSAGE)
    _raise_if(errors)


def validate_bingo_card(data: dict, full: bool = True) -> None:
    """
    Validate a bingo card payload.

    With ``full=True`` name and squares are required (create). Otherwise only the
    keys present in ``data`` are checked (partial update).
    """
    errors = []

    if full:
        if not is_present(data.get("name")):
            errors.append("Card name is required")
        elif not is_valid_card_name(data["name"]):
            errors.append(CARD_NAME_MESSAGE)
    elif "name" in data and not is_valid_card_name(data["name"]):
        errors.append(CARD_NAME_MESSAGE)

    date = data.get("date")
    if date is not None and (not isinstance(date, str) or len(date) > CARD_DATE_MAX):
        errors.append(f"Date must be a string with maximum {CARD_DATE_MAX} characters")

    venue = data.get("venue")
    if venue is not None and (not isinstance(venue, str) or len(venue) > CARD_VENUE_MAX):
        errors.append(f"Venue must be a string with maximum {CARD_VENUE_MAX} characters")

    if full:
        if data.get("squares") is None:
            errors.append("Bingo squares are required")
        elif not is_valid_squares(data["squares"]):
            errors.append(SQUARES_MESSAGE)
    elif "squares" in data and not is_valid_squares(data["squares"]):
        errors.append(SQUARES_MESSAGE)

    _raise_if(errors)


def parse_uuid(value: Any) -> Optional[uuid.UUID]:
    """Return ``value`` as a UUID, or None when it is not a well-formed id."""
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        return None

import re

from django.core.exceptions import ValidationError


E164_REGEX = re.compile(r"^\+[1-9]\d{1,14}$")
BARE_DIGITS_REGEX = re.compile(r"^\d{7,15}$")

E164_ERROR_MESSAGE = "Phone number must be in E.164 format (e.g., +14155552671)"


def normalize_phone_number(value: str) -> str:
    """
    Trim the value and prefix bare 7-15 digit strings with `+`.
    Anything else is returned untouched for `validate_phone_number` to judge.
    """
    value = (value or "").strip()
    if BARE_DIGITS_REGEX.match(value):
        return f"+{value}"
    return value


def validate_phone_number(value: str) -> None:
    if not E164_REGEX.match(value or ""):
        raise ValidationError(E164_ERROR_MESSAGE, code="invalid_phone_number")


def clean_phone_number(value: str) -> str:
    phone_number = normalize_phone_number(value)
    validate_phone_number(phone_number)
    return phone_number

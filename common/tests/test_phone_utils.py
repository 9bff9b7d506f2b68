from django.core.exceptions import ValidationError

import pytest

from common.utils.phone_utils import (
    clean_phone_number,
    normalize_phone_number,
    validate_phone_number,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("+14155552671", "+14155552671"),
        (" +14155552671 ", "+14155552671"),
        ("14155552671", "+14155552671"),
        ("5552671", "+5552671"),
        ("555267", "555267"),
        ("(415) 555-2671", "(415) 555-2671"),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_phone_number(value, expected):
    assert normalize_phone_number(value) == expected


@pytest.mark.parametrize("value", ["+14155552671", "+12", "+123456789012345"])
def test_validate_phone_number_accepts_e164(value):
    validate_phone_number(value)


@pytest.mark.parametrize(
    "value", ["14155552671", "+04155552671", "+1234567890123456", "+1 415 555 2671", ""]
)
def test_validate_phone_number_rejects_non_e164(value):
    with pytest.raises(ValidationError) as exc_info:
        validate_phone_number(value)

    assert exc_info.value.code == "invalid_phone_number"


def test_clean_phone_number():
    assert clean_phone_number("14155552671") == "+14155552671"
    with pytest.raises(ValidationError):
        clean_phone_number("call me")

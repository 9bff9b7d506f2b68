"""Recurrence engine: validates iCal RRULE strings and evaluates their occurrences.

Rules are stored without the `RRULE:` prefix, uppercased, with `FREQ` first.
Occurrences are computed in UTC from a `dtstart` built from an anchor date and
the activity's time of day.
"""

import datetime

from dateutil.rrule import rrule, rrulestr

from activities.exceptions import InvalidRecurrenceRuleError, NoOccurrenceError


RRULE_PREFIX = "RRULE:"


def _split_rule(rule: str) -> list[tuple[str, str]]:
    if not isinstance(rule, str):
        raise InvalidRecurrenceRuleError("Recurrence rule must be a string.")

    text = rule.strip().upper()
    if text.startswith(RRULE_PREFIX):
        text = text[len(RRULE_PREFIX) :]
    if not text or any(char.isspace() for char in text):
        raise InvalidRecurrenceRuleError("Recurrence rule must be a single RRULE line.")

    parts: list[tuple[str, str]] = []
    seen: set[str] = set()
    for part in text.strip(";").split(";"):
        name, separator, value = part.partition("=")
        if not separator or not name or not value:
            raise InvalidRecurrenceRuleError(f"Malformed recurrence rule part: {part!r}.")
        if name in seen:
            raise InvalidRecurrenceRuleError(f"Duplicated recurrence rule part: {name}.")
        seen.add(name)
        parts.append((name, value))
    return parts


def _check_bounds(parts: dict[str, str]) -> None:
    if "FREQ" not in parts:
        raise InvalidRecurrenceRuleError("Recurrence rule must define FREQ.")
    if "COUNT" in parts and "UNTIL" in parts:
        raise InvalidRecurrenceRuleError("Recurrence rule cannot define both COUNT and UNTIL.")
    for name in ("INTERVAL", "COUNT"):
        if name not in parts:
            continue
        if not parts[name].isdigit() or int(parts[name]) < 1:
            raise InvalidRecurrenceRuleError(f"{name} must be a positive integer.")


DAYS_IN_MONTH = (31, 29, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def _int_values(parts: dict[str, str], name: str) -> list[int]:
    if name not in parts:
        return []
    try:
        return [int(value) for value in parts[name].split(",")]
    except ValueError as e:
        raise InvalidRecurrenceRuleError(f"{name} must be a list of integers.") from e


def _check_satisfiable(parts: dict[str, str]) -> None:
    """
    Rejects BYMONTH/BYMONTHDAY combinations that match no calendar day, such as
    February 30th.
    """
    monthdays = _int_values(parts, "BYMONTHDAY")
    if not monthdays:
        return
    months = [month for month in _int_values(parts, "BYMONTH") if 1 <= month <= 12] or range(
        1, 13
    )
    for month in months:
        if any(1 <= abs(day) <= DAYS_IN_MONTH[month - 1] for day in monthdays):
            return
    raise InvalidRecurrenceRuleError("Recurrence rule never occurs: no month has that day.")


def _canonical(parts: list[tuple[str, str]]) -> str:
    ordered = sorted(parts, key=lambda part: part[0] != "FREQ")
    return ";".join(f"{name}={value}" for name, value in ordered)


def _has_floating_until(canonical_rule: str) -> bool:
    for part in canonical_rule.split(";"):
        name, _, value = part.partition("=")
        if name == "UNTIL":
            return not value.endswith("Z")
    return False


def _build_rule(canonical_rule: str, dtstart: datetime.datetime) -> rrule:
    """
    Builds the dateutil rule. A floating (non-UTC) UNTIL can only be combined
    with a naive `dtstart`, so those rules are evaluated on naive UTC datetimes.
    """
    if _has_floating_until(canonical_rule):
        dtstart = dtstart.replace(tzinfo=None)
    try:
        return rrulestr(f"{RRULE_PREFIX}{canonical_rule}", dtstart=dtstart)
    except (ValueError, TypeError, KeyError, IndexError) as e:
        raise InvalidRecurrenceRuleError(f"Invalid recurrence rule: {e}") from e


def validate_recurrence_rule(rule: str) -> str:
    """
    Validates an RRULE string and returns its canonical serialization.

    Accepts an optional `RRULE:` prefix. Requires FREQ, allows COUNT or UNTIL
    (not both) and requires INTERVAL and COUNT to be positive.

    :param rule: the recurrence rule string.
    :return: the canonical rule string.
    :raises InvalidRecurrenceRuleError: when the rule is not a well formed RRULE.
    """
    parts = _split_rule(rule)
    _check_bounds(dict(parts))
    _check_satisfiable(dict(parts))
    canonical_rule = _canonical(parts)
    _build_rule(canonical_rule, datetime.datetime(2000, 1, 1, tzinfo=datetime.UTC))
    return canonical_rule


def serialize_recurrence_rule(rule: str) -> str:
    return validate_recurrence_rule(rule)


def first_occurrence_after(
    rule: str,
    reference: datetime.datetime,
    time_of_day: datetime.time,
    starts_on: datetime.date,
) -> datetime.datetime:
    """
    Returns the earliest occurrence of `rule` at or after `reference`, in UTC.

    :param rule: the recurrence rule string.
    :param reference: the instant to search from (naive values are taken as UTC).
    :param time_of_day: time of day of each occurrence.
    :param starts_on: anchor date for the rule. COUNT and INTERVAL are counted
        from it, so it must not move with `reference`.
    :return: an aware UTC datetime.
    :raises NoOccurrenceError: when COUNT or UNTIL has already elapsed.
    """
    canonical_rule = validate_recurrence_rule(rule)

    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=datetime.UTC)
    reference = reference.astimezone(datetime.UTC)

    dtstart = datetime.datetime.combine(
        starts_on, time_of_day.replace(tzinfo=None), tzinfo=datetime.UTC
    )
    parsed_rule = _build_rule(canonical_rule, dtstart)

    if _has_floating_until(canonical_rule):
        occurrence = parsed_rule.after(reference.replace(tzinfo=None), inc=True)
        occurrence = occurrence.replace(tzinfo=datetime.UTC) if occurrence else None
    else:
        occurrence = parsed_rule.after(reference, inc=True)

    if occurrence is None:
        raise NoOccurrenceError()
    return occurrence

from common.exceptions import InvalidInput


class RecurrenceError(Exception):
    """Base exception for recurrence rule parsing and evaluation errors"""

    default_message = ""
    code = "recurrence_error"

    def __init__(self, message: str | None = None):
        if message is None:
            message = self.default_message
        super().__init__(message)


class InvalidRecurrenceRuleError(RecurrenceError):
    default_message = "Invalid recurrence rule."
    code = "invalid_recurrence_rule"


class NoOccurrenceError(RecurrenceError):
    default_message = "The recurrence rule has no occurrence left after the given date."
    code = "no_occurrence"


class EmptyActivityUpdateError(InvalidInput):
    default_detail = "No update fields provided."

from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError


class EventNotFoundError(NotFound):
    default_detail = "Event not found."
    default_code = "event_not_found"


class UpcomingEventNotFoundError(NotFound):
    default_detail = "No upcoming event found for this group."
    default_code = "upcoming_event_not_found"


class NotEventGroupMemberError(PermissionDenied):
    default_detail = "Forbidden: You are not a member of this event's group."
    default_code = "not_event_group_member"


class InvalidAttendanceStatusError(ValidationError):
    default_detail = "Invalid status provided. Must be 'in', 'out', or 'undecided'."
    default_code = "invalid_attendance_status"

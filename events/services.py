import datetime
import logging

from django.db import transaction
from django.utils import timezone

from events.constants import ATTENDANCE_STATUS_CHOICES, UNDECIDED
from events.exceptions import (
    EventNotFoundError,
    InvalidAttendanceStatusError,
    NotEventGroupMemberError,
    UpcomingEventNotFoundError,
)
from events.models import Event, EventAttendance
from groups.models import Group
from users.models import User


logger = logging.getLogger(__name__)


class EventService:
    def get_upcoming_event(self, group: Group, now: datetime.datetime | None = None) -> Event:
        """
        Earliest event of the group dated at or after `now`.
        :raises UpcomingEventNotFoundError: when the group has no upcoming event.
        """
        now = now or timezone.now()
        event = (
            Event.objects.filter(group=group, date__gte=now)
            .select_related("activity")
            .prefetch_related("attendances__user__profile")
            .order_by("date")
            .first()
        )
        if event is None:
            raise UpcomingEventNotFoundError()
        return event

    @transaction.atomic()
    def update_attendance(self, user: User, event_id: int, status: str) -> EventAttendance | None:
        """
        Set the user's attendance status for an event.

        The event row stays locked until commit so concurrent updates on the same
        event are applied one after the other.
        :param status: "in", "out" or "undecided". "undecided" deletes the user's
            attendance record.
        :return: the saved EventAttendance, or None when the user is undecided.
        """
        if status not in ATTENDANCE_STATUS_CHOICES:
            raise InvalidAttendanceStatusError()

        event = Event.objects.select_for_update().filter(pk=event_id).first()
        if event is None:
            raise EventNotFoundError()
        if not event.group.is_member(user):
            raise NotEventGroupMemberError()

        if status == UNDECIDED:
            EventAttendance.objects.filter(event=event, user=user).delete()
            logger.debug("User %s is undecided for event %s", user.pk, event.pk)
            return None

        attendance = EventAttendance.objects.filter(event=event, user=user).first()
        if attendance is None:
            attendance = EventAttendance(event=event, user=user)
        attendance.status = status
        attendance.save()
        logger.debug("User %s set status %s for event %s", user.pk, status, event.pk)
        return attendance

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import models

from common.models import BaseModel
from events.constants import AttendanceStatus


class Event(BaseModel):
    activity = models.ForeignKey(
        "activities.Activity", on_delete=models.CASCADE, related_name="events"
    )
    # denormalized from the activity, checked on every save
    group = models.ForeignKey("groups.Group", on_delete=models.CASCADE, related_name="events")
    date = models.DateTimeField(db_index=True)

    class Meta:
        ordering = ("date",)

    def __str__(self):
        return f"{self.activity} @ {self.date.isoformat()}"

    def clean(self):
        super().clean()
        if self.group_id != self.activity.group_id:
            raise ValidationError("data inconsistency", code="data_inconsistency")

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    def _users_with_status(self, status: AttendanceStatus):
        return get_user_model().objects.filter(
            event_attendances__event=self, event_attendances__status=status
        )

    @property
    def attendees(self):
        return self._users_with_status(AttendanceStatus.IN)

    @property
    def absentees(self):
        return self._users_with_status(AttendanceStatus.OUT)


class EventAttendance(BaseModel):
    """
    A member's decision for one event. No row means the member is undecided.
    """

    event = models.ForeignKey(Event, on_delete=models.CASCADE, related_name="attendances")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="event_attendances"
    )
    status = models.CharField(max_length=8, choices=AttendanceStatus.choices)

    class Meta:
        constraints = (
            models.UniqueConstraint(fields=("event", "user"), name="unique_event_attendance"),
        )

    def __str__(self):
        return f"{self.user_id} {self.status} {self.event_id}"

    def clean(self):
        super().clean()
        if self.status not in AttendanceStatus.values:
            raise ValidationError({"status": f"Invalid attendance status: {self.status!r}."})
        if not self.event.group.memberships.filter(user_id=self.user_id).exists():
            raise ValidationError("Only members of the event's group can attend it.")

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

from rest_framework import serializers

from activities.models import Activity
from users.serializers import UserSummarySerializer

from .constants import ATTENDANCE_STATUS_CHOICES, AttendanceStatus
from .models import Event


class EventActivitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Activity
        fields = ("id", "name", "location", "time")
        read_only_fields = fields


class EventSerializer(serializers.ModelSerializer):
    activity = EventActivitySerializer(read_only=True)
    attendees = serializers.SerializerMethodField()
    absentees = serializers.SerializerMethodField()

    class Meta:
        model = Event
        fields = ("id", "date", "group", "activity", "attendees", "absentees")
        read_only_fields = fields

    def _users_with_status(self, event: Event, status: str):
        # filters in python so prefetched attendances are reused
        users = [
            attendance.user for attendance in event.attendances.all() if attendance.status == status
        ]
        return UserSummarySerializer(users, many=True).data

    def get_attendees(self, obj) -> list[dict]:
        return self._users_with_status(obj, AttendanceStatus.IN)

    def get_absentees(self, obj) -> list[dict]:
        return self._users_with_status(obj, AttendanceStatus.OUT)


class AttendanceStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=ATTENDANCE_STATUS_CHOICES,
        error_messages={
            "invalid_choice": "Invalid status provided. Must be 'in', 'out', or 'undecided'."
        },
    )

from typing import Annotated

from dependency_injector.wiring import Provide, inject
from drf_spectacular.utils import extend_schema
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from events.models import Event
from events.serializers import AttendanceStatusSerializer, EventSerializer
from events.services import EventService
from groups.models import Group
from groups.permissions import IsGroupMember


class EventViewSet(GenericViewSet):
    """
    Attendance of the authenticated user to an event of one of their groups.
    """

    queryset = Event.objects.select_related("group")
    serializer_class = AttendanceStatusSerializer
    permission_classes = (IsAuthenticated, IsGroupMember)

    @inject
    def __init__(
        self,
        *args,
        event_service: Annotated[EventService, Provide["event_service"]],
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.event_service = event_service

    @action(detail=True, methods=["put"], url_path="status", url_name="status")
    def update_status(self, request, pk=None):
        event = self.get_object()
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        attendance_status = serializer.validated_data["status"]
        self.event_service.update_attendance(request.user, event.pk, attendance_status)
        return Response(
            {
                "message": f"Successfully updated status to '{attendance_status}'.",
                "status": attendance_status,
            }
        )


class GroupUpcomingEventViewSet(GenericViewSet):
    """
    Next event of a group, for its members.
    """

    queryset = Group.objects.all()
    serializer_class = EventSerializer
    permission_classes = (IsAuthenticated, IsGroupMember)
    lookup_url_kwarg = "group_id"

    @inject
    def __init__(
        self,
        *args,
        event_service: Annotated[EventService, Provide["event_service"]],
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.event_service = event_service

    @extend_schema(responses=EventSerializer)
    @action(detail=True, methods=["get"])
    def upcoming(self, request, group_id=None):
        group = self.get_object()
        event = self.event_service.get_upcoming_event(group)
        return Response(EventSerializer(event).data)

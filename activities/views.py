from typing import Annotated

from dependency_injector.wiring import Provide, inject
from rest_framework.permissions import IsAuthenticated

from activities.models import Activity
from activities.serializers import ActivitySerializer, ActivityUpdateSerializer
from activities.services import ActivityService
from common.utils.view_utils import NoCreateNoListRollcallModelViewSet
from groups.permissions import IsGroupAdmin, IsGroupMember


class ActivityViewSet(NoCreateNoListRollcallModelViewSet):
    """
    Members can read their group's activity; only group admins can change or
    delete it.
    """

    queryset = Activity.objects.select_related("group")
    serializer_class = ActivitySerializer
    write_serializer_class = ActivityUpdateSerializer
    destroy_message = "Activity deleted successfully."

    @inject
    def __init__(
        self,
        *args,
        activity_service: Annotated[ActivityService, Provide["activity_service"]],
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.activity_service = activity_service

    def get_permissions(self):
        if self.action == "retrieve":
            return [IsAuthenticated(), IsGroupMember()]
        return [IsAuthenticated(), IsGroupAdmin()]

    def perform_update(self, serializer):
        return self.activity_service.update_activity(
            serializer.instance, serializer.validated_data
        )

    def perform_destroy(self, instance):
        self.activity_service.delete_activity(instance)

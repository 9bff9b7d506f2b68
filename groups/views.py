from typing import Annotated

from dependency_injector.wiring import Provide, inject
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from common.utils.view_utils import NoUpdateNoListRollcallModelViewSet
from groups.models import Group, NonRegisteredMember
from groups.permissions import IsGroupAdmin, IsGroupMember
from groups.serializers import (
    AdminChangeSerializer,
    GroupCreateSerializer,
    GroupSerializer,
    MemberAddSerializer,
    MemberRemoveSerializer,
)
from groups.services import GroupService


DISSOLVED_MESSAGE = "Group has been dissolved successfully."


class GroupViewSet(NoUpdateNoListRollcallModelViewSet):
    """
    Groups, their members and their admins.
    """

    queryset = Group.objects.select_related("activity").prefetch_related(
        "members__profile", "non_registered_members"
    )
    serializer_class = GroupSerializer
    write_serializer_class = GroupCreateSerializer
    permission_classes = (IsAuthenticated,)
    destroy_message = DISSOLVED_MESSAGE

    @inject
    def __init__(
        self,
        *args,
        group_service: Annotated[GroupService, Provide["group_service"]],
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.group_service = group_service

    def get_permissions(self):
        if self.action in ("destroy", "members", "remove_member", "admins", "demote_admin"):
            return [IsAuthenticated(), IsGroupAdmin()]
        if self.action == "leave":
            return [IsAuthenticated(), IsGroupMember()]
        return super().get_permissions()

    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["group_service"] = self.group_service
        return context

    def perform_destroy(self, instance):
        self.group_service.delete_group(instance)

    @extend_schema(request=None)
    @action(detail=True, methods=["delete"])
    def leave(self, request, pk=None):
        group = self.get_object()
        dissolved = self.group_service.leave_group(request.user, group)
        message = DISSOLVED_MESSAGE if dissolved else "Successfully left group."
        return Response({"message": message}, status=status.HTTP_200_OK)

    @extend_schema(request=MemberAddSerializer)
    @action(detail=True, methods=["post"])
    def members(self, request, pk=None):
        group = self.get_object()
        serializer = MemberAddSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        member = self.group_service.add_member(group, **serializer.validated_data)
        if isinstance(member, NonRegisteredMember):
            message = "Non-registered member added to group."
        else:
            message = "Registered user added to group."
        return Response({"message": message}, status=status.HTTP_200_OK)

    @extend_schema(request=MemberRemoveSerializer)
    @members.mapping.delete
    def remove_member(self, request, pk=None):
        group = self.get_object()
        serializer = MemberRemoveSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dissolved = self.group_service.remove_member(group, **serializer.validated_data)
        message = DISSOLVED_MESSAGE if dissolved else "Member removed from group."
        return Response({"message": message}, status=status.HTTP_200_OK)

    @extend_schema(request=AdminChangeSerializer)
    @action(detail=True, methods=["post"])
    def admins(self, request, pk=None):
        group = self.get_object()
        serializer = AdminChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.group_service.promote_member(group, serializer.validated_data["user_id"])
        return Response({"message": "Member promoted to admin."}, status=status.HTTP_200_OK)

    @extend_schema(request=AdminChangeSerializer)
    @admins.mapping.delete
    def demote_admin(self, request, pk=None):
        group = self.get_object()
        serializer = AdminChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        self.group_service.demote_member(group, serializer.validated_data["user_id"])
        return Response({"message": "Admin rights removed."}, status=status.HTTP_200_OK)

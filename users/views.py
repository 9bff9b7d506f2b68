from drf_spectacular.utils import extend_schema
from rest_framework import mixins
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet, ViewSet

from .models import Profile, User
from .serializers import (
    MemberGroupSerializer,
    ProfileSerializer,
    ProfileUpdateSerializer,
    PublicProfileSerializer,
    UserSerializer,
)


class UserViewSet(ViewSet):
    """
    Endpoints scoped to the authenticated user.
    """

    permission_classes = (IsAuthenticated,)

    @extend_schema(responses=UserSerializer)
    @action(detail=False, methods=["get"])
    def me(self, request):
        user = (
            User.objects.select_related("profile")
            .prefetch_related("member_groups")
            .get(pk=request.user.pk)
        )
        return Response(UserSerializer(user).data)

    @extend_schema(responses=MemberGroupSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="me/groups")
    def my_groups(self, request):
        groups = request.user.member_groups.order_by("name")
        return Response(MemberGroupSerializer(groups, many=True).data)

    @extend_schema(request=ProfileUpdateSerializer, responses=ProfileSerializer)
    @action(detail=False, methods=["put", "patch"])
    def profile(self, request):
        profile, _ = Profile.objects.get_or_create(user=request.user)
        serializer = ProfileUpdateSerializer(profile, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        profile = serializer.save()
        return Response(ProfileSerializer(profile).data)


class PublicProfileViewSet(mixins.RetrieveModelMixin, GenericViewSet):
    """
    Public view of a user's profile, looked up by user id.
    """

    queryset = Profile.objects.filter(user__is_active=True)
    serializer_class = PublicProfileSerializer
    permission_classes = (AllowAny,)

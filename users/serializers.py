from rest_framework import serializers

from groups.models import Group

from .exceptions import EmptyProfileUpdateError
from .models import Profile, User


class UserSummarySerializer(serializers.ModelSerializer):
    first_name = serializers.CharField(source="profile.first_name", read_only=True)
    last_name = serializers.CharField(source="profile.last_name", read_only=True)
    profile_picture_url = serializers.CharField(
        source="profile.profile_picture_url", read_only=True
    )

    class Meta:
        model = User
        fields = ("id", "first_name", "last_name", "profile_picture_url")
        read_only_fields = fields


class PublicProfileSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="user_id", read_only=True)  # noqa: A003

    class Meta:
        model = Profile
        fields = ("id", "first_name", "last_name", "profile_picture_url", "bio")
        read_only_fields = fields


class ProfileSerializer(serializers.ModelSerializer):
    id = serializers.IntegerField(source="user_id", read_only=True)  # noqa: A003

    class Meta:
        model = Profile
        fields = ("id", "first_name", "last_name", "bio", "profile_picture_url")
        read_only_fields = ("id", "profile_picture_url")


class ProfileUpdateSerializer(serializers.ModelSerializer):
    firstName = serializers.CharField(  # noqa: N815
        source="first_name", max_length=255, required=False, allow_blank=True
    )
    lastName = serializers.CharField(  # noqa: N815
        source="last_name", max_length=255, required=False, allow_blank=True
    )

    class Meta:
        model = Profile
        fields = ("firstName", "lastName", "bio")

    def validate(self, attrs):
        if not attrs:
            raise EmptyProfileUpdateError()
        return attrs


class MemberGroupSerializer(serializers.ModelSerializer):
    class Meta:
        model = Group
        fields = ("id", "name", "cover_image_url")
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    profile = ProfileSerializer(read_only=True)
    groups = MemberGroupSerializer(source="member_groups", many=True, read_only=True)

    class Meta:
        model = User
        fields = (
            "id",
            "external_id",
            "phone_number",
            "email",
            "profile",
            "groups",
            "created",
            "modified",
        )
        read_only_fields = fields

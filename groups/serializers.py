from rest_framework import serializers

from activities.exceptions import InvalidRecurrenceRuleError
from activities.models import Activity
from activities.recurrence import validate_recurrence_rule
from users.serializers import UserSummarySerializer

from .models import Group, NonRegisteredMember


def recurrence_rule_field_validator(value: str) -> str:
    try:
        return validate_recurrence_rule(value)
    except InvalidRecurrenceRuleError as e:
        raise serializers.ValidationError(str(e), code=e.code) from e


class GroupSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Group
        fields = ("id", "name")
        read_only_fields = fields


class NonRegisteredMemberSerializer(serializers.ModelSerializer):
    class Meta:
        model = NonRegisteredMember
        fields = ("id", "name", "phone_number")
        read_only_fields = fields


class GroupActivitySerializer(serializers.ModelSerializer):
    class Meta:
        model = Activity
        fields = ("id", "name", "recurrence_rule", "location", "time")
        read_only_fields = fields


class GroupSerializer(serializers.ModelSerializer):
    members = UserSummarySerializer(many=True, read_only=True)
    admins = UserSummarySerializer(many=True, read_only=True)
    non_registered_members = NonRegisteredMemberSerializer(many=True, read_only=True)
    activity = GroupActivitySerializer(read_only=True)

    class Meta:
        model = Group
        fields = (
            "id",
            "name",
            "description",
            "cover_image_url",
            "members",
            "admins",
            "non_registered_members",
            "activity",
            "created",
            "modified",
        )
        read_only_fields = fields


class GroupCreateSerializer(serializers.Serializer):
    groupName = serializers.CharField(source="group_name", max_length=255)  # noqa: N815
    description = serializers.CharField(required=False, allow_blank=True, default="")
    coverImageUrl = serializers.URLField(  # noqa: N815
        source="cover_image_url", max_length=1024, required=False, allow_blank=True, default=""
    )
    activityName = serializers.CharField(source="activity_name", max_length=255)  # noqa: N815
    recurrenceRule = serializers.CharField(  # noqa: N815
        source="recurrence_rule", max_length=512, validators=[recurrence_rule_field_validator]
    )
    location = serializers.CharField(
        max_length=255, required=False, allow_blank=True, default=""
    )
    time = serializers.TimeField()

    def create(self, validated_data):
        group_service = self.context["group_service"]
        return group_service.create_group_with_activity(
            creator=self.context["request"].user, **validated_data
        )


class MemberAddSerializer(serializers.Serializer):
    phone = serializers.CharField(max_length=32)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True)


class MemberRemoveSerializer(serializers.Serializer):
    userId = serializers.IntegerField(source="user_id", required=False, min_value=1)  # noqa: N815
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)


class AdminChangeSerializer(serializers.Serializer):
    userId = serializers.IntegerField(source="user_id", min_value=1)  # noqa: N815

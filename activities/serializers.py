from rest_framework import serializers

from groups.serializers import GroupSummarySerializer, recurrence_rule_field_validator

from .models import Activity


class ActivitySerializer(serializers.ModelSerializer):
    group = GroupSummarySerializer(read_only=True)

    class Meta:
        model = Activity
        fields = (
            "id",
            "name",
            "recurrence_rule",
            "location",
            "time",
            "starts_on",
            "group",
            "created",
            "modified",
        )
        read_only_fields = fields


class ActivityUpdateSerializer(serializers.Serializer):
    """
    Input of activity updates. Every field is optional, PUT and PATCH alike.
    """

    name = serializers.CharField(max_length=255, required=False)
    recurrenceRule = serializers.CharField(  # noqa: N815
        source="recurrence_rule",
        max_length=512,
        required=False,
        validators=[recurrence_rule_field_validator],
    )
    location = serializers.CharField(max_length=255, required=False, allow_blank=True)
    time = serializers.TimeField(required=False)

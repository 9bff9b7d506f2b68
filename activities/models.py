from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone

from activities.exceptions import InvalidRecurrenceRuleError
from activities.recurrence import validate_recurrence_rule
from common.models import BaseModel


def recurrence_rule_validator(value: str) -> None:
    try:
        validate_recurrence_rule(value)
    except InvalidRecurrenceRuleError as e:
        raise ValidationError(str(e), code=e.code) from e


def default_starts_on():
    return timezone.now().date()


class Activity(BaseModel):
    group = models.ForeignKey("groups.Group", on_delete=models.CASCADE, related_name="activities")
    name = models.CharField(max_length=255)
    recurrence_rule = models.CharField(max_length=512, validators=[recurrence_rule_validator])
    location = models.CharField(max_length=255, blank=True)
    time = models.TimeField()
    # anchors COUNT bounded rules to the day the activity was created
    starts_on = models.DateField(default=default_starts_on)

    class Meta:
        verbose_name_plural = "activities"

    def __str__(self):
        return self.name

    def clean(self):
        super().clean()
        try:
            self.recurrence_rule = validate_recurrence_rule(self.recurrence_rule)
        except InvalidRecurrenceRuleError as e:
            raise ValidationError({"recurrence_rule": str(e)}, code=e.code) from e

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

from django.db import models


class AttendanceStatus(models.TextChoices):
    IN = "in", "In"
    OUT = "out", "Out"


UNDECIDED = "undecided"

ATTENDANCE_STATUS_CHOICES = (*AttendanceStatus.values, UNDECIDED)

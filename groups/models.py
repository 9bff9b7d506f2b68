from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models

from common.models import BaseModel
from common.utils.phone_utils import clean_phone_number


class Group(BaseModel):
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    cover_image_url = models.URLField(max_length=1024, blank=True)
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through="GroupMembership",
        related_name="member_groups",
        blank=True,
    )
    activity = models.OneToOneField(
        "activities.Activity",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="linked_group",
    )

    def __str__(self):
        return self.name

    def clean(self):
        super().clean()
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Group name is required."})
        # a new group gets its admin membership right after the first insert
        if self.pk:
            self.ensure_admins()
        if self.activity_id and self.pk and self.activity.group_id != self.pk:
            raise ValidationError({"activity": "Linked activity must belong to this group."})

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    @property
    def admins(self):
        return self.members.filter(group_memberships__group=self, group_memberships__is_admin=True)

    def is_member(self, user) -> bool:
        if user is None or not user.is_authenticated:
            return False
        return self.memberships.filter(user_id=user.pk).exists()

    def is_admin(self, user) -> bool:
        if user is None or not user.is_authenticated:
            return False
        return self.memberships.filter(user_id=user.pk, is_admin=True).exists()

    def ensure_admins(self) -> None:
        """
        Raises `ValidationError` unless the group has at least one admin and
        every admin holds a membership.
        """
        if not self.memberships.filter(is_admin=True).exists():
            raise ValidationError("A group must have at least one admin.")


class GroupMembership(BaseModel):
    group = models.ForeignKey(Group, on_delete=models.CASCADE, related_name="memberships")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="group_memberships"
    )
    is_admin = models.BooleanField(default=False)

    class Meta:
        constraints = (
            models.UniqueConstraint(fields=("group", "user"), name="unique_group_membership"),
        )

    def __str__(self):
        role = "admin" if self.is_admin else "member"
        return f"{self.user_id} ({role}) in {self.group_id}"

    def _other_admins(self):
        return GroupMembership.objects.filter(group_id=self.group_id, is_admin=True).exclude(
            pk=self.pk
        )

    def save(self, *args, **kwargs):
        if (
            self.pk
            and not self.is_admin
            and GroupMembership.objects.filter(pk=self.pk, is_admin=True).exists()
            and not self._other_admins().exists()
        ):
            raise ValidationError("Cannot remove admin rights from the last admin of a group.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        if (
            self.is_admin
            and not self._other_admins().exists()
            and GroupMembership.objects.filter(group_id=self.group_id).exclude(pk=self.pk).exists()
        ):
            raise ValidationError(
                "The last admin cannot leave the group while other members remain."
            )
        return super().delete(*args, **kwargs)


class NonRegisteredMember(BaseModel):
    group = models.ForeignKey(
        Group, on_delete=models.CASCADE, related_name="non_registered_members"
    )
    name = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=16)

    class Meta:
        constraints = (
            models.UniqueConstraint(
                fields=("group", "phone_number"), name="unique_group_non_registered_phone"
            ),
        )

    def __str__(self):
        return f"{self.name} <{self.phone_number}>"

    def clean(self):
        super().clean()
        self.name = (self.name or "").strip()
        if not self.name:
            raise ValidationError({"name": "Name is required for non-registered members."})
        try:
            self.phone_number = clean_phone_number(self.phone_number)
        except ValidationError as e:
            raise ValidationError({"phone_number": e.messages}) from e

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils.translation import gettext_lazy as _

from common.models import BaseModel
from common.utils.phone_utils import clean_phone_number

from .managers import UserManager


class User(AbstractBaseUser, PermissionsMixin, BaseModel):
    external_id = models.CharField(
        max_length=255,
        unique=True,
        help_text=_("User id assigned by the identity provider."),
    )
    phone_number = models.CharField(max_length=16, unique=True)
    email = models.EmailField(max_length=255, unique=True, null=True, blank=True)

    is_staff = models.BooleanField(
        default=False,
        help_text=_("Designates whether the user can log into this admin site."),
    )
    is_active = models.BooleanField(
        default=True,
        help_text=_(
            "Designates whether this user should be treated as "
            "active. Unselect this instead of deleting accounts."
        ),
    )

    objects: UserManager = UserManager()
    profile: "Profile"

    USERNAME_FIELD = "external_id"
    REQUIRED_FIELDS = ["phone_number"]  # noqa: RUF012

    def clean(self):
        super().clean()
        self.phone_number = clean_phone_number(self.phone_number)
        # blank emails are stored as NULL so the unique constraint ignores them
        self.email = self.__class__.objects.normalize_email(self.email) or None

    def save(self, *args, **kwargs):
        self.clean()
        super().save(*args, **kwargs)

    def get_full_name(self):
        return str(self.profile)

    def get_short_name(self):
        return self.profile.first_name

    def __str__(self):
        return f"{self.external_id} <{self.phone_number}>"


class Profile(BaseModel):
    user = models.OneToOneField(
        User, on_delete=models.CASCADE, related_name="profile", primary_key=True
    )
    first_name = models.CharField(max_length=255, blank=True)
    last_name = models.CharField(max_length=255, blank=True)
    bio = models.TextField(blank=True)
    profile_picture_url = models.URLField(max_length=1024, blank=True)

    def __str__(self):
        return f"{self.first_name} {self.last_name}".strip()

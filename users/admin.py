from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.utils.translation import gettext_lazy as _

from .models import Profile, User


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False
    fields = ("first_name", "last_name", "bio", "profile_picture_url")


@admin.register(User)
class CustomUserAdmin(UserAdmin):
    list_display = ("id", "external_id", "phone_number", "email", "created", "modified")
    list_filter = ("is_active", "is_staff")
    search_fields = ("external_id", "phone_number", "email")
    ordering = ("-created",)
    inlines = (ProfileInline,)
    filter_horizontal = ("user_permissions",)

    fieldsets = (
        (None, {"fields": ("external_id", "phone_number", "email")}),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "user_permissions")},
        ),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("external_id", "phone_number", "password1", "password2"),
            },
        ),
    )


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ("user", "first_name", "last_name")
    search_fields = ("first_name", "last_name", "user__phone_number")
    list_filter = ("user__is_active",)

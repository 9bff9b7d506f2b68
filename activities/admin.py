from django.contrib import admin

from .models import Activity


@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "group", "recurrence_rule", "time", "starts_on")
    search_fields = ("name", "group__name")
    raw_id_fields = ("group",)

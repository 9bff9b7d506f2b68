from django.contrib import admin

from .models import Event, EventAttendance


class EventAttendanceInline(admin.TabularInline):
    model = EventAttendance
    extra = 0
    raw_id_fields = ("user",)


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    list_display = ("id", "activity", "group", "date")
    list_filter = ("date",)
    raw_id_fields = ("activity", "group")
    inlines = (EventAttendanceInline,)

from django.contrib import admin

from .models import Group, GroupMembership, NonRegisteredMember


class GroupMembershipInline(admin.TabularInline):
    model = GroupMembership
    extra = 0
    raw_id_fields = ("user",)


class NonRegisteredMemberInline(admin.TabularInline):
    model = NonRegisteredMember
    extra = 0


@admin.register(Group)
class GroupAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "activity", "created", "modified")
    search_fields = ("name",)
    raw_id_fields = ("activity",)
    inlines = (GroupMembershipInline, NonRegisteredMemberInline)

from rest_framework.permissions import BasePermission

from groups.exceptions import NotGroupAdminError, NotGroupMemberError
from groups.models import Group


def get_owning_group(obj) -> Group | None:
    """
    Group that governs access to `obj`: the group itself, or the group an
    activity or event belongs to.
    """
    if isinstance(obj, Group):
        return obj
    return getattr(obj, "group", None)


class IsGroupMember(BasePermission):
    message = NotGroupMemberError.default_detail
    code = NotGroupMemberError.default_code

    def has_object_permission(self, request, view, obj):
        group = get_owning_group(obj)
        return group is not None and group.is_member(request.user)


class IsGroupAdmin(BasePermission):
    message = NotGroupAdminError.default_detail
    code = NotGroupAdminError.default_code

    def has_object_permission(self, request, view, obj):
        group = get_owning_group(obj)
        return group is not None and group.is_admin(request.user)

from rest_framework.exceptions import NotFound, PermissionDenied

from common.exceptions import InvalidInput


class NotGroupMemberError(PermissionDenied):
    default_detail = "Forbidden: You are not a member of this group."
    default_code = "not_group_member"


class NotGroupAdminError(PermissionDenied):
    default_detail = "Forbidden: You do not have admin rights for this group."
    default_code = "not_group_admin"


class MemberNotFoundError(NotFound):
    default_detail = "Member not found in this group."
    default_code = "member_not_found"


class NonRegisteredMemberNameRequiredError(InvalidInput):
    default_detail = "Name is required for non-registered members."


class MemberIdentifierRequiredError(InvalidInput):
    default_detail = "Either user_id or phone is required to remove a member."

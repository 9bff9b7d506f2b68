import datetime
import logging
from typing import Annotated

from django.db import transaction
from django.utils import timezone

from dependency_injector.wiring import Provide, inject

from activities.models import Activity
from activities.services import ActivityService
from common.utils.phone_utils import clean_phone_number, normalize_phone_number
from events.models import Event, EventAttendance
from groups.exceptions import (
    MemberIdentifierRequiredError,
    MemberNotFoundError,
    NonRegisteredMemberNameRequiredError,
    NotGroupMemberError,
)
from groups.models import Group, GroupMembership, NonRegisteredMember
from users.models import User


logger = logging.getLogger(__name__)


class GroupService:
    @inject
    def __init__(
        self,
        activity_service: Annotated[ActivityService, Provide["activity_service"]],
    ):
        self.activity_service = activity_service

    @transaction.atomic()
    def create_group_with_activity(
        self,
        creator: User,
        group_name: str,
        activity_name: str,
        recurrence_rule: str,
        time: datetime.time,
        description: str = "",
        location: str = "",
        cover_image_url: str = "",
        now: datetime.datetime | None = None,
    ) -> Group:
        """
        Create a group with the creator as its only admin, plus its activity and
        the activity's first event. Nothing is persisted if any step fails.
        :param creator: User creating the group.
        :param recurrence_rule: RRULE string of the activity.
        :param time: time of day of the activity (UTC).
        :param now: reference instant for the first event, defaults to now.
        :return: the created Group.
        """
        group = Group.objects.create(
            name=group_name,
            description=description or "",
            cover_image_url=cover_image_url or "",
        )
        GroupMembership.objects.create(group=group, user=creator, is_admin=True)

        self.activity_service.create_activity(
            group=group,
            name=activity_name,
            recurrence_rule=recurrence_rule,
            time=time,
            location=location,
            now=now,
        )

        group.ensure_admins()
        logger.info("User %s created group %s", creator.pk, group.pk)
        return group

    @transaction.atomic()
    def delete_group(self, group: Group) -> None:
        """
        Dissolve the group: memberships, non-registered members, events and
        activities go with it.
        """
        group_id = group.pk
        # queryset deletes skip the per-membership last admin guard
        GroupMembership.objects.filter(group=group).delete()
        NonRegisteredMember.objects.filter(group=group).delete()
        Event.objects.filter(group=group).delete()
        Activity.objects.filter(group=group).delete()
        group.delete()
        logger.info("Group %s dissolved", group_id)

    def _remove_membership(
        self, membership: GroupMembership, now: datetime.datetime | None = None
    ) -> bool:
        group = membership.group
        if not group.memberships.exclude(pk=membership.pk).exists():
            self.delete_group(group)
            return True

        membership.delete()
        EventAttendance.objects.filter(
            user_id=membership.user_id,
            event__group=group,
            event__date__gte=now or timezone.now(),
        ).delete()
        return False

    @transaction.atomic()
    def leave_group(self, user: User, group: Group, now: datetime.datetime | None = None) -> bool:
        """
        Remove the user from the group, dropping both member and admin roles.
        The last admin can't leave while other members remain; the last member
        leaving dissolves the group.
        :return: True when the group was dissolved.
        """
        membership = group.memberships.select_related("group").filter(user=user).first()
        if membership is None:
            raise NotGroupMemberError()
        return self._remove_membership(membership, now=now)

    @transaction.atomic()
    def add_member(
        self, group: Group, phone: str, name: str | None = None
    ) -> User | NonRegisteredMember:
        """
        Add a member by phone number. Registered users become members, anyone
        else is kept as a non-registered member. Adding twice is a no-op.
        :return: the added User or NonRegisteredMember.
        """
        phone_number = clean_phone_number(phone)

        user = User.objects.get_by_phone_number(phone_number)
        if user is not None:
            GroupMembership.objects.get_or_create(group=group, user=user)
            group.non_registered_members.filter(phone_number=phone_number).delete()
            return user

        name = (name or "").strip()
        if not name:
            raise NonRegisteredMemberNameRequiredError()
        member, _ = NonRegisteredMember.objects.get_or_create(
            group=group, phone_number=phone_number, defaults={"name": name}
        )
        return member

    @transaction.atomic()
    def remove_member(
        self,
        group: Group,
        user_id: int | None = None,
        phone: str | None = None,
        now: datetime.datetime | None = None,
    ) -> bool:
        """
        Remove a registered member by `user_id`, or any member by `phone`.
        :return: True when removing the member dissolved the group.
        """
        if user_id:
            membership = group.memberships.select_related("group").filter(user_id=user_id).first()
            if membership is None:
                raise MemberNotFoundError()
            return self._remove_membership(membership, now=now)

        if phone:
            phone_number = normalize_phone_number(phone)
            membership = (
                group.memberships.select_related("group")
                .filter(user__phone_number=phone_number)
                .first()
            )
            if membership is not None:
                return self._remove_membership(membership, now=now)

            deleted, _ = group.non_registered_members.filter(phone_number=phone_number).delete()
            if not deleted:
                raise MemberNotFoundError()
            return False

        raise MemberIdentifierRequiredError()

    def _get_membership(self, group: Group, user_id: int) -> GroupMembership:
        membership = group.memberships.filter(user_id=user_id).first()
        if membership is None:
            raise MemberNotFoundError()
        return membership

    @transaction.atomic()
    def promote_member(self, group: Group, user_id: int) -> GroupMembership:
        membership = self._get_membership(group, user_id)
        if not membership.is_admin:
            membership.is_admin = True
            membership.save(update_fields=["is_admin", "modified"])
        return membership

    @transaction.atomic()
    def demote_member(self, group: Group, user_id: int) -> GroupMembership:
        membership = self._get_membership(group, user_id)
        if membership.is_admin:
            membership.is_admin = False
            membership.save(update_fields=["is_admin", "modified"])
        return membership

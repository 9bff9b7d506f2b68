import logging
from typing import Any, TypedDict

from django.db import transaction

from accounts.exceptions import (
    AuthenticatedUserNotFoundError,
    PhoneNumberInUseError,
    WebhookPhoneNumberMissingError,
    WebhookUserIdMissingError,
)
from common.utils.phone_utils import clean_phone_number
from groups.models import GroupMembership, NonRegisteredMember
from users.models import Profile, User


logger = logging.getLogger(__name__)


class ProviderUserData(TypedDict):
    external_id: str
    phone_number: str | None
    email: str | None
    first_name: str
    last_name: str
    profile_picture_url: str


def _primary_value(items: list[dict[str, Any]] | None, primary_id: str | None, key: str):
    items = items or []
    for item in items:
        if primary_id and item.get("id") == primary_id:
            return item.get(key)
    return items[0].get(key) if items else None


class IdentityService:
    """
    Maps identity provider users to local users. `resolve_user` is the only
    lookup the rest of the API depends on.
    """

    def resolve_user(self, external_id: str) -> User:
        user = (
            User.objects.select_related("profile")
            .filter(external_id=external_id, is_active=True)
            .first()
        )
        if user is None:
            raise AuthenticatedUserNotFoundError()
        return user

    def parse_provider_user(self, data: dict[str, Any]) -> ProviderUserData:
        """
        Extract the user fields from a provider webhook `data` object.
        :raises WebhookUserIdMissingError: when the payload has no user id.
        """
        external_id = data.get("id")
        if not external_id:
            raise WebhookUserIdMissingError()

        return ProviderUserData(
            external_id=external_id,
            phone_number=_primary_value(
                data.get("phone_numbers"), data.get("primary_phone_number_id"), "phone_number"
            ),
            email=_primary_value(
                data.get("email_addresses"),
                data.get("primary_email_address_id"),
                "email_address",
            ),
            first_name=data.get("first_name") or "",
            last_name=data.get("last_name") or "",
            profile_picture_url=data.get("image_url") or "",
        )

    def _clean_phone_for(self, phone_number: str, user: User | None = None) -> str:
        phone_number = clean_phone_number(phone_number)
        others = User.objects.filter(phone_number=phone_number)
        if user is not None:
            others = others.exclude(pk=user.pk)
        if others.exists():
            raise PhoneNumberInUseError()
        return phone_number

    def _claim_non_registered_memberships(self, user: User) -> None:
        placeholders = NonRegisteredMember.objects.filter(phone_number=user.phone_number)
        for placeholder in placeholders:
            GroupMembership.objects.get_or_create(group_id=placeholder.group_id, user=user)
        placeholders.delete()

    @transaction.atomic()
    def create_user(self, data: ProviderUserData) -> tuple[User, bool]:
        """
        Create the local user for a provider user. Existing users are returned
        untouched.
        :return: the user and whether it was created.
        """
        existing = User.objects.filter(external_id=data["external_id"]).first()
        if existing is not None:
            return existing, False

        if not data["phone_number"]:
            raise WebhookPhoneNumberMissingError()

        user = User.objects.create_user(
            external_id=data["external_id"],
            phone_number=self._clean_phone_for(data["phone_number"]),
            email=data["email"],
        )
        Profile.objects.create(
            user=user,
            first_name=data["first_name"],
            last_name=data["last_name"],
            profile_picture_url=data["profile_picture_url"],
        )
        self._claim_non_registered_memberships(user)
        logger.info("Synced new user %s from identity provider", user.pk)
        return user, True

    @transaction.atomic()
    def update_user(self, data: ProviderUserData) -> User:
        """
        Apply provider side changes to a local user, creating it when missing.
        """
        user = User.objects.filter(external_id=data["external_id"]).first()
        if user is None:
            user, _ = self.create_user(data)
            return user

        if data["phone_number"]:
            user.phone_number = self._clean_phone_for(data["phone_number"], user=user)
        user.email = data["email"]
        user.save()

        profile, _ = Profile.objects.get_or_create(user=user)
        profile.first_name = data["first_name"]
        profile.last_name = data["last_name"]
        profile.profile_picture_url = data["profile_picture_url"]
        profile.save()

        self._claim_non_registered_memberships(user)
        logger.info("Synced updated user %s from identity provider", user.pk)
        return user

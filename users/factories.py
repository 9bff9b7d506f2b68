import itertools
from collections.abc import Callable

from cuid2 import cuid_wrapper
from model_bakery import baker

from users.models import Profile, User


cuid_generator: Callable[[], str] = cuid_wrapper()

_phone_sequence = itertools.count(1)


def next_phone_number() -> str:
    return f"+1555{next(_phone_sequence):07d}"


class UserFactory:
    def create_user(self, **kwargs) -> User:
        external_id = kwargs.pop("external_id", f"user_{cuid_generator()}")
        try:
            return User.objects.get(external_id=external_id)
        except User.DoesNotExist:
            pass

        profile_fields = {
            field: kwargs.pop(field)
            for field in ("first_name", "last_name", "bio", "profile_picture_url")
            if field in kwargs
        }

        user = baker.prepare(
            User,
            external_id=external_id,
            phone_number=kwargs.pop("phone_number", next_phone_number()),
            email=kwargs.pop("email", None),
            **kwargs,
        )
        user.set_unusable_password()
        user.save()

        ProfileFactory().create_profile(user=user, **profile_fields)
        return user


class ProfileFactory:
    def create_profile(self, user, **kwargs) -> Profile:
        kwargs.setdefault("first_name", "Test")
        kwargs.setdefault("last_name", "User")
        return baker.make(Profile, user=user, **kwargs)

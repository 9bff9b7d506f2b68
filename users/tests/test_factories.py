import pytest

from users.factories import UserFactory
from users.models import Profile


@pytest.mark.django_db
class TestUserFactory:
    def test_create_user_with_profile_fields(self):
        user = UserFactory().create_user(first_name="Grace", bio="Admiral")

        assert user.profile.first_name == "Grace"
        assert user.profile.last_name == "User"
        assert user.profile.bio == "Admiral"
        assert not user.has_usable_password()

    def test_existing_external_id_returns_same_user(self):
        user = UserFactory().create_user(external_id="user_grace")

        assert UserFactory().create_user(external_id="user_grace") == user
        assert Profile.objects.filter(user=user).count() == 1

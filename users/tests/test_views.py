from django.urls import reverse

import pytest
from rest_framework import status

from groups.factories import GroupFactory
from users.factories import UserFactory


@pytest.mark.django_db
class TestUserViewSet:
    """Test suite for the endpoints scoped to the authenticated user."""

    def test_me(self, auth_client, user):
        """Test retrieving the authenticated user with profile and groups."""
        group = GroupFactory().create_group(admin=user, name="Chess Club")

        response = auth_client.get(reverse("api:Users-me"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["id"] == user.pk
        assert response.data["phone_number"] == user.phone_number
        assert response.data["profile"]["first_name"] == "Test"
        assert [g["id"] for g in response.data["groups"]] == [group.pk]

    def test_me_unauthenticated(self, anonymous_client):
        response = anonymous_client.get(reverse("api:Users-me"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_my_groups(self, auth_client, user, other_user):
        """Test listing the user's groups, alphabetically."""
        soccer = GroupFactory().create_group(admin=user, name="Soccer Club")
        chess = GroupFactory().create_group(admin=other_user, members=[user], name="Chess Club")
        GroupFactory().create_group(admin=other_user, name="Book Club")

        response = auth_client.get(reverse("api:Users-my-groups"))

        assert response.status_code == status.HTTP_200_OK
        assert [g["id"] for g in response.data] == [chess.pk, soccer.pk]

    def test_my_groups_empty(self, auth_client):
        response = auth_client.get(reverse("api:Users-my-groups"))

        assert response.status_code == status.HTTP_200_OK
        assert response.data == []

    def test_update_profile(self, auth_client, user):
        """Test partially updating the user's profile."""
        response = auth_client.patch(
            reverse("api:Users-profile"), {"bio": "Goalkeeper"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        user.profile.refresh_from_db()
        assert user.profile.bio == "Goalkeeper"
        assert user.profile.first_name == "Test"

    def test_put_profile_is_partial(self, auth_client, user):
        response = auth_client.put(
            reverse("api:Users-profile"), {"firstName": "Ada"}, format="json"
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["first_name"] == "Ada"
        assert response.data["last_name"] == "User"

    def test_update_profile_names(self, auth_client, user):
        response = auth_client.patch(
            reverse("api:Users-profile"),
            {"firstName": "Ada", "lastName": "Lovelace", "bio": "Analyst"},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        user.profile.refresh_from_db()
        assert str(user.profile) == "Ada Lovelace"
        assert user.profile.bio == "Analyst"

    def test_update_profile_ignores_snake_case_names(self, auth_client, user):
        response = auth_client.patch(
            reverse("api:Users-profile"), {"first_name": "Ada"}, format="json"
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        user.profile.refresh_from_db()
        assert user.profile.first_name == "Test"

    def test_update_profile_without_fields(self, auth_client):
        response = auth_client.patch(reverse("api:Users-profile"), {}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {"detail": "No update fields provided.", "code": "invalid_input"}

    def test_update_profile_unauthenticated(self, anonymous_client):
        response = anonymous_client.patch(
            reverse("api:Users-profile"), {"bio": "Goalkeeper"}, format="json"
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.django_db
class TestPublicProfileViewSet:
    def test_retrieve_public_profile(self, anonymous_client):
        other = UserFactory().create_user(first_name="Grace", last_name="Hopper", bio="Admiral")

        response = anonymous_client.get(
            reverse("api:PublicProfile-detail", kwargs={"pk": other.pk})
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data == {
            "id": other.pk,
            "first_name": "Grace",
            "last_name": "Hopper",
            "profile_picture_url": "",
            "bio": "Admiral",
        }
        assert "phone_number" not in response.data

    def test_inactive_user_profile_is_hidden(self, anonymous_client):
        other = UserFactory().create_user(is_active=False)

        response = anonymous_client.get(
            reverse("api:PublicProfile-detail", kwargs={"pk": other.pk})
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

import datetime
import json

from django.urls import reverse
from django.utils import timezone

import pytest
from rest_framework import status
from rest_framework.test import APIClient

from activities.models import Activity
from events.models import Event
from groups.factories import ActivityFactory, GroupFactory
from users.factories import UserFactory


def assert_response_status_code(response, expected_status_code):
    assert response.status_code == expected_status_code, (
        f"The status error {response.status_code} != {expected_status_code}\n"
        f"Response Payload: {json.dumps(response.json() if hasattr(response, 'json') and callable(response.json) else str(response.content))}"
    )


@pytest.fixture
def group(user, other_user):
    return GroupFactory().create_group(admin=user, members=[other_user])


@pytest.fixture
def activity(group):
    return ActivityFactory().create_activity(
        group, event_dates=[timezone.now() + datetime.timedelta(days=2)]
    )


@pytest.mark.django_db
class TestActivityViewSet:
    def test_retrieve_as_member(self, other_auth_client, activity, group):
        url = reverse("api:Activities-detail", kwargs={"pk": activity.pk})
        response = other_auth_client.get(url)

        assert_response_status_code(response, status.HTTP_200_OK)
        assert response.data["name"] == "Thursday Game"
        assert response.data["recurrence_rule"] == "FREQ=WEEKLY;BYDAY=TH"
        assert response.data["time"] == "19:00:00"
        assert response.data["group"] == {"id": group.pk, "name": group.name}

    def test_retrieve_as_non_member_is_forbidden(self, activity):
        client = APIClient()
        client.force_authenticate(user=UserFactory().create_user())
        url = reverse("api:Activities-detail", kwargs={"pk": activity.pk})
        response = client.get(url)

        assert_response_status_code(response, status.HTTP_403_FORBIDDEN)
        assert response.data["code"] == "not_group_member"

    def test_retrieve_missing_activity(self, auth_client):
        url = reverse("api:Activities-detail", kwargs={"pk": 999999})
        response = auth_client.get(url)

        assert_response_status_code(response, status.HTTP_404_NOT_FOUND)

    def test_retrieve_unauthenticated(self, anonymous_client, activity):
        url = reverse("api:Activities-detail", kwargs={"pk": activity.pk})
        response = anonymous_client.get(url)

        assert_response_status_code(response, status.HTTP_401_UNAUTHORIZED)

    def test_partial_update_as_admin(self, auth_client, activity):
        url = reverse("api:Activities-detail", kwargs={"pk": activity.pk})
        response = auth_client.patch(
            url, {"name": "Friday Game", "recurrenceRule": "FREQ=WEEKLY;BYDAY=FR"}, format="json"
        )

        assert_response_status_code(response, status.HTTP_200_OK)
        assert response.data["name"] == "Friday Game"
        activity.refresh_from_db()
        assert activity.recurrence_rule == "FREQ=WEEKLY;BYDAY=FR"
        assert activity.location == "Main field"

    def test_update_as_member_is_forbidden(self, other_auth_client, activity):
        url = reverse("api:Activities-detail", kwargs={"pk": activity.pk})
        response = other_auth_client.patch(url, {"name": "Hijacked"}, format="json")

        assert_response_status_code(response, status.HTTP_403_FORBIDDEN)
        assert response.data["code"] == "not_group_admin"
        activity.refresh_from_db()
        assert activity.name == "Thursday Game"

    def test_update_with_invalid_rule(self, auth_client, activity):
        url = reverse("api:Activities-detail", kwargs={"pk": activity.pk})
        response = auth_client.put(url, {"recurrenceRule": "NOT_A_RULE"}, format="json")

        assert_response_status_code(response, status.HTTP_400_BAD_REQUEST)
        assert "recurrenceRule" in response.data
        activity.refresh_from_db()
        assert activity.recurrence_rule == "FREQ=WEEKLY;BYDAY=TH"

    def test_empty_update(self, auth_client, activity):
        url = reverse("api:Activities-detail", kwargs={"pk": activity.pk})
        response = auth_client.patch(url, {}, format="json")

        assert_response_status_code(response, status.HTTP_400_BAD_REQUEST)
        assert response.data == {"detail": "No update fields provided.", "code": "invalid_input"}

    def test_delete_as_admin(self, auth_client, activity, group):
        url = reverse("api:Activities-detail", kwargs={"pk": activity.pk})
        response = auth_client.delete(url)

        assert_response_status_code(response, status.HTTP_200_OK)
        group.refresh_from_db()
        assert group.activity is None
        assert not Activity.objects.filter(pk=activity.pk).exists()
        assert not Event.objects.filter(activity_id=activity.pk).exists()

    def test_delete_as_member_is_forbidden(self, other_auth_client, activity):
        url = reverse("api:Activities-detail", kwargs={"pk": activity.pk})
        response = other_auth_client.delete(url)

        assert_response_status_code(response, status.HTTP_403_FORBIDDEN)
        assert Activity.objects.filter(pk=activity.pk).exists()

import json
import time

from django.conf import settings
from django.urls import reverse

import pytest

from accounts.webhook_validators import SvixWebhookValidator
from groups.factories import GroupFactory
from groups.models import NonRegisteredMember
from users.models import User


def provider_user_payload(event_type="user.created", **overrides):
    data = {
        "id": "user_2abcdefghijk",
        "first_name": "Ada",
        "last_name": "Lovelace",
        "image_url": "https://img.example.com/ada.png",
        "primary_phone_number_id": "phone_2",
        "phone_numbers": [
            {"id": "phone_1", "phone_number": "+14155550111"},
            {"id": "phone_2", "phone_number": "+14155550100"},
        ],
        "primary_email_address_id": "email_1",
        "email_addresses": [{"id": "email_1", "email_address": "ada@example.com"}],
    }
    data.update(overrides)
    return {"type": event_type, "data": data}


class TestUserSyncWebhookView:
    @staticmethod
    def get_url():
        return reverse("user-sync")

    @staticmethod
    def post_signed(client, payload, message_id="msg_1", timestamp=None, signature=None):
        body = json.dumps(payload).encode()
        timestamp = int(time.time()) if timestamp is None else timestamp
        if signature is None:
            validator = SvixWebhookValidator(settings.IDENTITY_PROVIDER_WEBHOOK_SECRET)
            signature = f"v1,{validator.sign(message_id, timestamp, body)}"
        return client.post(
            reverse("user-sync"),
            data=body,
            content_type="application/json",
            HTTP_SVIX_ID=message_id,
            HTTP_SVIX_TIMESTAMP=str(timestamp),
            HTTP_SVIX_SIGNATURE=signature,
        )

    @pytest.mark.django_db
    def test_user_created(self, client):
        response = self.post_signed(client, provider_user_payload())

        assert response.status_code == 201
        assert response.json()["message"] == "User synced successfully."
        user = User.objects.get(external_id="user_2abcdefghijk")
        assert user.phone_number == "+14155550100"
        assert user.email == "ada@example.com"
        assert user.profile.first_name == "Ada"
        assert user.profile.profile_picture_url == "https://img.example.com/ada.png"
        assert response.json()["user"]["id"] == user.pk

    @pytest.mark.django_db
    def test_user_created_twice(self, client):
        self.post_signed(client, provider_user_payload())

        response = self.post_signed(client, provider_user_payload(), message_id="msg_2")

        assert response.status_code == 200
        assert response.json() == {"message": "User already exists."}
        assert User.objects.filter(external_id="user_2abcdefghijk").count() == 1

    @pytest.mark.django_db
    def test_user_created_claims_non_registered_memberships(self, client, user):
        group = GroupFactory().create_group(admin=user)
        NonRegisteredMember.objects.create(group=group, name="Ada", phone_number="+14155550100")

        self.post_signed(client, provider_user_payload())

        new_user = User.objects.get(external_id="user_2abcdefghijk")
        assert group.is_member(new_user)
        assert not group.non_registered_members.exists()

    @pytest.mark.django_db
    def test_user_created_without_phone_number(self, client):
        response = self.post_signed(client, provider_user_payload(phone_numbers=[]))

        assert response.status_code == 400
        assert response.json() == {
            "detail": "Phone number is required for user creation.",
            "code": "invalid_input",
        }
        assert not User.objects.exists()

    @pytest.mark.django_db
    def test_user_created_without_id(self, client):
        response = self.post_signed(client, provider_user_payload(id=None))

        assert response.status_code == 400
        assert response.json()["detail"] == "Webhook data is missing user ID."

    @pytest.mark.django_db
    def test_user_updated(self, client):
        self.post_signed(client, provider_user_payload())

        response = self.post_signed(
            client,
            provider_user_payload("user.updated", first_name="Augusta", email_addresses=[]),
            message_id="msg_2",
        )

        assert response.status_code == 200
        assert response.json()["message"] == "User updated successfully."
        user = User.objects.get(external_id="user_2abcdefghijk")
        assert user.profile.first_name == "Augusta"
        assert user.email is None

    @pytest.mark.django_db
    def test_user_updated_creates_missing_user(self, client):
        response = self.post_signed(client, provider_user_payload("user.updated"))

        assert response.status_code == 200
        assert User.objects.filter(external_id="user_2abcdefghijk").exists()

    @pytest.mark.django_db
    def test_other_events_are_ignored(self, client):
        response = self.post_signed(client, provider_user_payload("session.created"))

        assert response.status_code == 200
        assert response.json() == {"message": "Event ignored."}
        assert not User.objects.exists()

    @pytest.mark.django_db
    def test_invalid_signature(self, client):
        response = self.post_signed(client, provider_user_payload(), signature="v1,bm90LXZhbGlk")

        assert response.status_code == 400
        assert response.json()["code"] == "invalid_webhook_signature"
        assert not User.objects.exists()

    @pytest.mark.django_db
    def test_stale_timestamp(self, client):
        response = self.post_signed(
            client, provider_user_payload(), timestamp=int(time.time()) - 3600
        )

        assert response.status_code == 400
        assert not User.objects.exists()

    @pytest.mark.django_db
    def test_missing_headers(self, client):
        response = client.post(
            self.get_url(),
            data=json.dumps(provider_user_payload()),
            content_type="application/json",
        )

        assert response.status_code == 400
        assert not User.objects.exists()

    @pytest.mark.django_db
    def test_body_must_be_a_json_object(self, client):
        response = self.post_signed(client, ["not", "an", "object"])

        assert response.status_code == 400

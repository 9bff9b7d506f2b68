import datetime

from django.conf import settings
from django.urls import reverse

import jwt
import pytest
from rest_framework.test import APIClient


def make_token(sub, **claims):
    now = datetime.datetime.now(tz=datetime.UTC)
    payload = {
        "sub": sub,
        "iss": settings.IDENTITY_PROVIDER_JWT_ISSUER,
        "iat": now,
        "exp": now + datetime.timedelta(minutes=5),
        **claims,
    }
    return jwt.encode(payload, settings.IDENTITY_PROVIDER_JWT_KEY, algorithm="HS256")


@pytest.fixture
def client():
    return APIClient()


@pytest.mark.django_db
class TestExternalIdentityAuthentication:
    def test_valid_token(self, client, user):
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_token(user.external_id)}")

        response = client.get(reverse("api:Users-me"))

        assert response.status_code == 200
        assert response.data["id"] == user.pk

    def test_missing_header(self, client):
        response = client.get(reverse("api:Users-me"))

        assert response.status_code == 401
        assert response["WWW-Authenticate"] == 'Bearer realm="api"'

    def test_unknown_user(self, client):
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_token('user_unknown')}")

        response = client.get(reverse("api:Users-me"))

        assert response.status_code == 404
        assert response.data == {
            "detail": "Authenticated user not found.",
            "code": "authenticated_user_not_found",
        }

    def test_inactive_user(self, client, user):
        user.is_active = False
        user.save()
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {make_token(user.external_id)}")

        response = client.get(reverse("api:Users-me"))

        assert response.status_code == 404

    def test_token_with_wrong_signature(self, client, user):
        token = jwt.encode(
            {"sub": user.external_id, "iss": settings.IDENTITY_PROVIDER_JWT_ISSUER},
            "some-other-signing-key-0123456789abcdef",
            algorithm="HS256",
        )
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = client.get(reverse("api:Users-me"))

        assert response.status_code == 401

    def test_expired_token(self, client, user):
        expired = datetime.datetime.now(tz=datetime.UTC) - datetime.timedelta(hours=1)
        client.credentials(
            HTTP_AUTHORIZATION=f"Bearer {make_token(user.external_id, exp=expired)}"
        )

        response = client.get(reverse("api:Users-me"))

        assert response.status_code == 401
        assert response.data["detail"] == "Session token has expired."

    def test_token_from_another_issuer(self, client, user):
        token = make_token(user.external_id, iss="https://someone-else.example.com")
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = client.get(reverse("api:Users-me"))

        assert response.status_code == 401

    def test_token_without_subject(self, client):
        token = jwt.encode(
            {"iss": settings.IDENTITY_PROVIDER_JWT_ISSUER},
            settings.IDENTITY_PROVIDER_JWT_KEY,
            algorithm="HS256",
        )
        client.credentials(HTTP_AUTHORIZATION=f"Bearer {token}")

        response = client.get(reverse("api:Users-me"))

        assert response.status_code == 401

    def test_malformed_header(self, client):
        client.credentials(HTTP_AUTHORIZATION="Bearer")

        response = client.get(reverse("api:Users-me"))

        assert response.status_code == 401

import pytest
from rest_framework.test import APIClient


@pytest.fixture
def user():
    from users.factories import UserFactory

    return UserFactory().create_user(first_name="Test", last_name="User")


@pytest.fixture
def other_user():
    from users.factories import UserFactory

    return UserFactory().create_user(first_name="Other", last_name="Person")


@pytest.fixture
def auth_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def other_auth_client(other_user):
    client = APIClient()
    client.force_authenticate(user=other_user)
    return client


@pytest.fixture
def anonymous_client():
    client = APIClient()
    return client


@pytest.fixture
def di_container():
    """Fixture to create a DI container."""
    from di_core.containers import container

    return container

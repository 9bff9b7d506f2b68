from django.core.exceptions import ValidationError

import pytest

from users.models import User


@pytest.mark.django_db
def test_create_user():
    """Test creating a user synced from the identity provider"""
    user = User.objects.create_user(external_id="user_123", phone_number="+14155552671")
    assert user.external_id == "user_123"
    assert user.phone_number == "+14155552671"
    assert user.email is None
    assert not user.has_usable_password()
    assert not user.is_superuser
    assert not user.is_staff
    assert user.is_active


@pytest.mark.django_db
def test_create_user_normalizes_phone_number():
    """Test bare digit phone numbers get the E.164 plus sign"""
    user = User.objects.create_user(external_id="user_123", phone_number=" 14155552671 ")
    assert user.phone_number == "+14155552671"


@pytest.mark.django_db
def test_create_user_with_invalid_phone_number():
    """Test phone numbers that can't be made E.164 are rejected"""
    with pytest.raises(ValidationError):
        User.objects.create_user(external_id="user_123", phone_number="555-CALL-NOW")
    assert not User.objects.exists()


@pytest.mark.django_db
def test_create_user_without_external_id():
    """Test the external id is mandatory"""
    with pytest.raises(ValueError):
        User.objects.create_user(external_id="", phone_number="+14155552671")


@pytest.mark.django_db
def test_create_superuser():
    """Test creating a superuser"""
    admin_user = User.objects.create_superuser(
        external_id="admin", phone_number="+14155552671", password="adminpassword123"
    )
    assert admin_user.check_password("adminpassword123")
    assert admin_user.is_superuser
    assert admin_user.is_staff
    assert admin_user.is_active


@pytest.mark.django_db
def test_create_superuser_with_invalid_flags():
    """Test creating a superuser with is_staff=False should fail"""
    with pytest.raises(ValueError):
        User.objects.create_superuser(
            external_id="admin", phone_number="+14155552671", password="pw", is_staff=False
        )


@pytest.mark.django_db
def test_email_normalization():
    """Test email normalization during user creation"""
    user = User.objects.create_user(
        external_id="user_123", phone_number="+14155552671", email="Test@EXAMPLE.com"
    )
    # BaseUserManager.normalize_email() only normalizes the domain part
    assert user.email == "Test@example.com"


@pytest.mark.django_db
def test_get_by_phone_number():
    user = User.objects.create_user(external_id="user_123", phone_number="+14155552671")
    assert User.objects.get_by_phone_number("+14155552671") == user
    assert User.objects.get_by_phone_number("+14155552672") is None

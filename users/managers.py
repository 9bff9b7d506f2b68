from django.contrib.auth.models import BaseUserManager


class UserManager(BaseUserManager):
    use_in_migrations = True

    def _create_user(self, external_id, phone_number, password, **extra_fields):
        if not external_id:
            raise ValueError("The external id must be set")
        email = extra_fields.pop("email", None)
        user = self.model(
            external_id=external_id,
            phone_number=phone_number,
            email=self.normalize_email(email) if email else None,
            **extra_fields,
        )
        if password:
            user.set_password(password)
        else:
            # identity provider users never sign in with a local password
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, external_id, phone_number, password=None, **extra_fields):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        return self._create_user(external_id, phone_number, password, **extra_fields)

    def create_superuser(self, external_id, phone_number, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(external_id, phone_number, password, **extra_fields)

    def get_by_phone_number(self, phone_number):
        return self.filter(phone_number=phone_number).first()

from .base import *


SECRET_KEY = "test"  # nosec

STATIC_ROOT = base_dir_join("staticfiles")
STATIC_URL = "/static/"

# Speed up password hashing
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Celery
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True

# Identity provider
IDENTITY_PROVIDER_JWT_KEY = "test-identity-provider-signing-key-0123456789"  # noqa: S105
IDENTITY_PROVIDER_JWT_ALGORITHMS = ["HS256"]
IDENTITY_PROVIDER_JWT_ISSUER = "https://identity.test.rollcall.app"
IDENTITY_PROVIDER_JWT_AUDIENCE = ""
# base64 of "test-webhook-secret"
IDENTITY_PROVIDER_WEBHOOK_SECRET = "whsec_dGVzdC13ZWJob29rLXNlY3JldA=="  # noqa: S105

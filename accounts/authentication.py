import logging
from typing import Annotated

from django.conf import settings

import jwt
from dependency_injector.wiring import Provide, inject
from rest_framework import exceptions
from rest_framework.authentication import BaseAuthentication, get_authorization_header

from accounts.services import IdentityService


logger = logging.getLogger(__name__)


class ExternalIdentityAuthentication(BaseAuthentication):
    """
    Authenticates `Authorization: Bearer <token>` requests carrying a session JWT
    issued by the identity provider. The `sub` claim is the provider's user id.
    """

    keyword = "Bearer"

    @inject
    def __init__(
        self,
        identity_service: Annotated[IdentityService, Provide["identity_service"]],
    ):
        self.identity_service = identity_service

    def authenticate(self, request):
        auth = get_authorization_header(request).split()
        if not auth or auth[0].lower() != self.keyword.lower().encode():
            return None

        if len(auth) != 2:  # noqa: PLR2004
            raise exceptions.AuthenticationFailed("Invalid authorization header.")

        try:
            token = auth[1].decode()
        except UnicodeError as e:
            raise exceptions.AuthenticationFailed("Invalid session token.") from e

        payload = self.decode_token(token)
        user = self.identity_service.resolve_user(payload["sub"])
        return (user, payload)

    def decode_token(self, token: str) -> dict:
        audience = settings.IDENTITY_PROVIDER_JWT_AUDIENCE or None
        try:
            return jwt.decode(
                token,
                settings.IDENTITY_PROVIDER_JWT_KEY.replace("\\n", "\n"),
                algorithms=list(settings.IDENTITY_PROVIDER_JWT_ALGORITHMS),
                audience=audience,
                issuer=settings.IDENTITY_PROVIDER_JWT_ISSUER or None,
                leeway=settings.IDENTITY_PROVIDER_JWT_LEEWAY_SECONDS,
                options={"require": ["sub"], "verify_aud": audience is not None},
            )
        except jwt.ExpiredSignatureError as e:
            raise exceptions.AuthenticationFailed("Session token has expired.") from e
        except jwt.PyJWTError as e:
            logger.info("Rejected session token: %s", e)
            raise exceptions.AuthenticationFailed("Invalid session token.") from e

    def authenticate_header(self, request):
        return f'{self.keyword} realm="api"'

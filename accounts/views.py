import json
import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject
from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.exceptions import ParseError
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from accounts.services import IdentityService
from accounts.webhook_validators import SvixWebhookValidator
from users.serializers import UserSerializer


logger = logging.getLogger(__name__)


class UserSyncWebhookView(APIView):
    """
    Receives identity provider webhooks and mirrors provider users locally.
    """

    authentication_classes = ()
    permission_classes = (AllowAny,)

    @inject
    def __init__(
        self,
        *args,
        identity_service: Annotated[IdentityService, Provide["identity_service"]],
        webhook_validator: Annotated[SvixWebhookValidator, Provide["webhook_validator"]],
        **kwargs,
    ):
        super().__init__(*args, **kwargs)
        self.identity_service = identity_service
        self.webhook_validator = webhook_validator

    @extend_schema(exclude=True)
    def post(self, request, *args, **kwargs):
        # the signature covers the raw body, read it before DRF parses it
        body = request.body
        self.webhook_validator.validate(request.headers, body)

        try:
            payload = json.loads(body)
        except (TypeError, ValueError) as e:
            raise ParseError("Webhook body is not valid JSON.") from e
        if not isinstance(payload, dict):
            raise ParseError("Webhook body must be a JSON object.")

        event_type = payload.get("type")
        data = payload.get("data") or {}

        if event_type == "user.created":
            user, created = self.identity_service.create_user(
                self.identity_service.parse_provider_user(data)
            )
            if not created:
                return Response({"message": "User already exists."}, status=status.HTTP_200_OK)
            return Response(
                {"message": "User synced successfully.", "user": UserSerializer(user).data},
                status=status.HTTP_201_CREATED,
            )

        if event_type == "user.updated":
            user = self.identity_service.update_user(
                self.identity_service.parse_provider_user(data)
            )
            return Response(
                {"message": "User updated successfully.", "user": UserSerializer(user).data},
                status=status.HTTP_200_OK,
            )

        logger.info("Ignoring identity provider webhook of type %s", event_type)
        return Response({"message": "Event ignored."}, status=status.HTTP_200_OK)

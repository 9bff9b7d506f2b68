from rest_framework import status
from rest_framework.exceptions import APIException, NotFound, ValidationError

from common.exceptions import InvalidInput


class AuthenticatedUserNotFoundError(NotFound):
    default_detail = "Authenticated user not found."
    default_code = "authenticated_user_not_found"


class WebhookVerificationError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid webhook signature."
    default_code = "invalid_webhook_signature"


class WebhookUserIdMissingError(InvalidInput):
    default_detail = "Webhook data is missing user ID."


class WebhookPhoneNumberMissingError(InvalidInput):
    default_detail = "Phone number is required for user creation."


class PhoneNumberInUseError(ValidationError):
    default_detail = "Phone number is already in use by another user."
    default_code = "phone_number_in_use"

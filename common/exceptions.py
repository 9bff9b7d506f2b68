from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError


class InvalidInput(ValidationError):
    default_detail = "A required field is missing or empty."
    default_code = "invalid_input"

    def __init__(self, detail=None, code=None):
        # keep the flat {"detail": ..., "code": ...} body instead of a list
        super().__init__(detail, code)
        self.detail = self.detail[0] if isinstance(self.detail, list) else self.detail


class ServerError(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "The server could not complete the request. Please try again later."
    default_code = "server_error"

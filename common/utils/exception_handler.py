import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import DatabaseError

from rest_framework.exceptions import APIException, ValidationError
from rest_framework.fields import get_error_detail
from rest_framework.views import exception_handler

from activities.exceptions import RecurrenceError
from common.exceptions import ServerError


logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    Project-wide DRF exception handler.

    Translates model invariant failures (Django `ValidationError`), recurrence
    errors and database failures into API errors, then defers to DRF. Error
    bodies with a single `detail` also carry its `code`.
    """
    if isinstance(exc, DjangoValidationError):
        exc = ValidationError(detail=get_error_detail(exc))
    elif isinstance(exc, RecurrenceError):
        exc = ValidationError(detail={"recurrenceRule": [str(exc)]}, code=exc.code)
    elif isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.exception(
            "Database error while handling %s", view.__class__.__name__ if view else "request"
        )
        exc = ServerError()

    response = exception_handler(exc, context)
    if (
        response is not None
        and isinstance(exc, APIException)
        and isinstance(response.data, dict)
        and "detail" in response.data
        and "code" not in response.data
    ):
        codes = exc.get_codes()
        if isinstance(codes, str):
            response.data["code"] = codes
    return response

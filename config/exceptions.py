import logging

from django.db import DatabaseError
from django.db.models import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from membership.exceptions import GymError, StoreFailure, ValidationFailure

logger = logging.getLogger(__name__)


def gym_exception_handler(exc, context):
    """
    DRF exception handler: renders domain errors as {"detail": ...}.

    Store errors are logged with their traceback and surfaced as a 500 with a
    generic message; nothing is retried.
    """
    view = context.get("view")
    view_name = view.__class__.__name__ if view else "unknown view"

    if isinstance(exc, ProtectedError):
        return Response(
            {"detail": "This record is still referenced by other records and cannot be deleted."},
            status=status.HTTP_409_CONFLICT,
        )

    if isinstance(exc, DatabaseError):
        logger.error("Store failure in %s", view_name, exc_info=exc)
        exc = StoreFailure()

    if isinstance(exc, GymError):
        data = {"detail": exc.message}
        if isinstance(exc, ValidationFailure) and exc.fields:
            data["fields"] = exc.fields
        return Response(data, status=exc.status_code)

    return exception_handler(exc, context)

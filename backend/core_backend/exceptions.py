"""
Project-wide DRF exception handler.

Domain exceptions raised by the services are turned into
`{"error": message, "code": code}` responses here, so views never need
their own try/except blocks.
"""
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from business_hours.exceptions import InvalidWeeklySchedule, MalformedSchedule
from cart.exceptions import CartEstablishmentMismatch, EmptyCartError, UnknownCatalogItem
from orders.exceptions import EstablishmentClosed, IllegalTransition, InvalidLineItem

logger = logging.getLogger(__name__)

DOMAIN_ERROR_STATUS = (
    (InvalidLineItem, status.HTTP_400_BAD_REQUEST),
    (EmptyCartError, status.HTTP_400_BAD_REQUEST),
    (InvalidWeeklySchedule, status.HTTP_400_BAD_REQUEST),
    (MalformedSchedule, status.HTTP_400_BAD_REQUEST),
    (IllegalTransition, status.HTTP_409_CONFLICT),
    (CartEstablishmentMismatch, status.HTTP_409_CONFLICT),
    (EstablishmentClosed, status.HTTP_409_CONFLICT),
    (UnknownCatalogItem, status.HTTP_404_NOT_FOUND),
)


def status_for(exc):
    for exc_class, status_code in DOMAIN_ERROR_STATUS:
        if isinstance(exc, exc_class):
            return status_code
    return None


def api_exception_handler(exc, context):
    """
    Delegate to DRF's default handler, then map domain exceptions.

    Anything that is neither a DRF exception nor a known domain error is
    left unhandled so Django reports it as a server error.
    """
    response = exception_handler(exc, context)
    if response is not None:
        return response

    status_code = status_for(exc)
    if status_code is None:
        return None

    data = {"error": str(exc), "code": getattr(exc, "code", exc.__class__.__name__)}
    if isinstance(exc, EstablishmentClosed) and exc.next_opening is not None:
        data["proxima_abertura"] = exc.next_opening.isoformat()

    request = context.get("request")
    path = request.path if request is not None else "?"
    logger.warning(f"{exc.__class__.__name__} on {path}: {exc}")

    return Response(data, status=status_code)

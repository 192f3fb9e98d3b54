import logging
from datetime import datetime
from unittest.mock import Mock

import pytest
import pytz
from rest_framework import status
from rest_framework.exceptions import ValidationError

from business_hours.exceptions import InvalidWeeklySchedule, MalformedSchedule
from cart.exceptions import CartEstablishmentMismatch, EmptyCartError, UnknownCatalogItem
from core_backend.exceptions import api_exception_handler
from orders.exceptions import EstablishmentClosed, IllegalTransition, InvalidLineItem
from orders.status import OrderStatus

pytestmark = pytest.mark.unit


def context(path='/api/orders/1/'):
    return {'request': Mock(path=path), 'view': None}


class TestApiExceptionHandler:
    """Domain errors become JSON responses with a stable code"""

    @pytest.mark.parametrize('exc,expected_status', [
        (InvalidLineItem(None), status.HTTP_400_BAD_REQUEST),
        (EmptyCartError(), status.HTTP_400_BAD_REQUEST),
        (InvalidWeeklySchedule("six days"), status.HTTP_400_BAD_REQUEST),
        (MalformedSchedule(1, "25:00"), status.HTTP_400_BAD_REQUEST),
        (IllegalTransition(OrderStatus.IN_TRANSIT, OrderStatus.CANCELLED), status.HTTP_409_CONFLICT),
        (CartEstablishmentMismatch(1, 2), status.HTTP_409_CONFLICT),
        (UnknownCatalogItem(12), status.HTTP_404_NOT_FOUND),
    ])
    def test_status_mapping(self, exc, expected_status):
        response = api_exception_handler(exc, context())

        assert response.status_code == expected_status
        assert response.data == {'error': str(exc), 'code': exc.code}

    def test_closed_includes_next_opening(self):
        establishment = Mock()
        establishment.name = 'Farmácia Central'
        next_opening = pytz.timezone('America/Sao_Paulo').localize(datetime(2024, 1, 16, 8, 0))

        response = api_exception_handler(EstablishmentClosed(establishment, next_opening), context())

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data['code'] == 'establishment_closed'
        assert response.data['proxima_abertura'] == '2024-01-16T08:00:00-03:00'

    def test_drf_exceptions_untouched(self):
        response = api_exception_handler(ValidationError({'status': ['Invalid']}), context())

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data == {'status': ['Invalid']}

    def test_unknown_exceptions_not_handled(self):
        assert api_exception_handler(RuntimeError('boom'), context()) is None

    def test_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger='core_backend.exceptions'):
            api_exception_handler(EmptyCartError(), context('/api/orders/'))

        assert 'EmptyCartError on /api/orders/' in caplog.text

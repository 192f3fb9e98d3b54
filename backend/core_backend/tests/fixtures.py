"""
Shared test fixtures for all backend tests.

This module provides reusable pytest fixtures for common test objects
like establishments, users, catalog items, carts and orders.
"""
from datetime import time
from decimal import Decimal

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import RefreshToken

from business_hours.models import BusinessHours
from cart.models import Cart, CartItem
from establishments.models import Establishment
from payments.models import PaymentMethod
from products.models import CatalogItem
from users.models import Address, User


def authenticate(client, user):
    """Attach a bearer token for ``user`` to an APIClient."""
    refresh = RefreshToken.for_user(user)
    client.credentials(HTTP_AUTHORIZATION=f"Bearer {refresh.access_token}")
    return client


def set_week(establishment, opening=time(0, 0), closing=time(23, 59), closed=False):
    """Give ``establishment`` the same hours on all seven weekdays."""
    for weekday in range(7):
        BusinessHours.objects.update_or_create(
            establishment=establishment,
            weekday=weekday,
            defaults={
                'is_closed': closed,
                'opening_time': opening,
                'closing_time': closing,
            },
        )


# ============================================================================
# ESTABLISHMENT FIXTURES
# ============================================================================

@pytest.fixture
def establishment(db):
    """Pharmacy charging 10.00 delivery, free from 50.00"""
    return Establishment.objects.create(
        name='Farmácia Central',
        phone='11 3333-4444',
        coverage_radius_km=Decimal('5.00'),
        delivery_fee=Decimal('10.00'),
        free_delivery_threshold=Decimal('50.00'),
        timezone='America/Sao_Paulo',
    )


@pytest.fixture
def other_establishment(db):
    """Second pharmacy, used for single-establishment cart checks"""
    return Establishment.objects.create(
        name='Drogaria Bairro',
        delivery_fee=Decimal('7.50'),
        free_delivery_threshold=Decimal('0.00'),
        timezone='America/Sao_Paulo',
    )


@pytest.fixture
def always_open(establishment):
    """Open 00:00-23:59 every day"""
    set_week(establishment)
    return establishment


@pytest.fixture
def always_closed(establishment):
    """Closed on every weekday"""
    set_week(establishment, closed=True)
    return establishment


# ============================================================================
# USER FIXTURES
# ============================================================================

@pytest.fixture
def client_user(db):
    return User.objects.create_user(
        email='cliente@example.com',
        password='password123',
        name='Ana Cliente',
        phone_number='11 99999-0000',
        role=User.Role.CLIENT,
    )


@pytest.fixture
def other_client_user(db):
    return User.objects.create_user(
        email='outro@example.com',
        password='password123',
        name='Bruno Outro',
        role=User.Role.CLIENT,
    )


@pytest.fixture
def operator_user(establishment):
    return User.objects.create_user(
        email='operador@farmacia.com',
        password='password123',
        name='Carla Operadora',
        role=User.Role.ESTABLISHMENT,
        establishment=establishment,
    )


@pytest.fixture
def other_operator_user(other_establishment):
    return User.objects.create_user(
        email='operador@drogaria.com',
        password='password123',
        role=User.Role.ESTABLISHMENT,
        establishment=other_establishment,
    )


@pytest.fixture
def address(client_user):
    return Address.objects.create(
        user=client_user,
        street='Rua das Flores',
        number='120',
        district='Centro',
        city='São Paulo',
        state='SP',
        postal_code='01001-000',
        is_default=True,
    )


# ============================================================================
# CATALOG & PAYMENT FIXTURES
# ============================================================================

@pytest.fixture
def dipyrone(establishment):
    return CatalogItem.objects.create(
        establishment=establishment,
        name='Dipirona',
        presentation='500mg, 20 comprimidos',
        price=Decimal('40.00'),
    )


@pytest.fixture
def vitamin_c(establishment):
    return CatalogItem.objects.create(
        establishment=establishment,
        name='Vitamina C',
        presentation='1g, 10 efervescentes',
        price=Decimal('10.00'),
    )


@pytest.fixture
def foreign_item(other_establishment):
    """Catalog item sold by the other establishment"""
    return CatalogItem.objects.create(
        establishment=other_establishment,
        name='Protetor Solar',
        presentation='FPS 50, 120ml',
        price=Decimal('59.90'),
    )


@pytest.fixture
def payment_method(db):
    method, _ = PaymentMethod.objects.get_or_create(name='Pix', defaults={'is_active': True})
    return method


# ============================================================================
# CART FIXTURES
# ============================================================================

@pytest.fixture
def cart(client_user):
    return Cart.objects.create(client=client_user)


@pytest.fixture
def filled_cart(cart, dipyrone, vitamin_c):
    """[40.00 x 1, 10.00 x 2]: subtotal 60.00, ships free"""
    CartItem.objects.create(cart=cart, catalog_item=dipyrone, quantity=1)
    CartItem.objects.create(cart=cart, catalog_item=vitamin_c, quantity=2)
    cart.establishment = dipyrone.establishment
    cart.save()
    return cart


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """Unauthenticated DRF API client"""
    return APIClient()


@pytest.fixture
def client_api(client_user):
    """API client logged in as ``client_user``"""
    return authenticate(APIClient(), client_user)


@pytest.fixture
def operator_api(operator_user):
    """API client logged in as the operator of ``establishment``"""
    return authenticate(APIClient(), operator_user)


@pytest.fixture
def other_operator_api(other_operator_user):
    return authenticate(APIClient(), other_operator_user)


@pytest.fixture
def other_client_api(other_client_user):
    return authenticate(APIClient(), other_client_user)

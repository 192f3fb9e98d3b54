"""
Establishment Management Tests

Pharmacy sign-up with its default week, operator edits of the profile and
delivery policy, and establishment addresses.
"""

from decimal import Decimal

import pytest
from django.db import IntegrityError

from business_hours.models import BusinessHours
from establishments.models import Establishment, EstablishmentAddress
from establishments.services import EstablishmentService
from users.models import User

ESTABLISHMENTS_URL = '/api/establishments/'
REGISTER_URL = '/api/establishments/register/'

REGISTRATION = {
    'razao_social': 'Farmácia Nova',
    'telefone_contato': '11 4000-1000',
    'taxa_entrega': '8.00',
    'valor_minimo_entrega': '80.00',
    'email': 'dono@farmacianova.com',
    'senha': 'segredo123',
    'nome_responsavel': 'Diego Dono',
}

ADDRESS = {
    'logradouro': 'Rua Augusta',
    'numero': '1500',
    'bairro': 'Consolação',
    'cidade': 'São Paulo',
    'estado': 'sp',
    'cep': '01304-001',
}


def establishment_url(establishment, suffix=''):
    return f'{ESTABLISHMENTS_URL}{establishment.id}/{suffix}'


@pytest.mark.django_db
class TestEstablishmentService:
    """Test registration and profile changes at the service level"""

    def test_register_creates_operator_and_default_week(self):
        establishment, operator = EstablishmentService.register(
            {'name': 'Farmácia Nova', 'delivery_fee': Decimal('8.00')},
            {'email': 'dono@farmacianova.com', 'password': 'segredo123'},
        )

        assert operator.role == User.Role.ESTABLISHMENT
        assert operator.establishment == establishment
        assert operator.check_password('segredo123')

        rows = BusinessHours.objects.filter(establishment=establishment).order_by('weekday')
        assert [row.weekday for row in rows] == list(range(7))
        assert all(not row.is_closed for row in rows)
        assert {(row.opening_time.hour, row.closing_time.hour) for row in rows} == {(8, 18)}

    def test_register_rolls_back_when_operator_fails(self, client_user):
        with pytest.raises(IntegrityError):
            EstablishmentService.register({'name': 'Farmácia Nova'}, {'email': client_user.email, 'password': 'x'})

        assert not Establishment.objects.filter(name='Farmácia Nova').exists()

    def test_update_profile_changes_delivery_policy(self, establishment):
        EstablishmentService.update_profile(establishment, free_delivery_threshold=Decimal('100.00'))

        establishment.refresh_from_db()
        assert establishment.delivery_policy().free_threshold == Decimal('100.00')


@pytest.mark.django_db
class TestRegistrationAPI:
    """Test POST /api/establishments/register/"""

    def test_register(self, api_client):
        response = api_client.post(REGISTER_URL, dict(REGISTRATION, endereco=ADDRESS), format='json')

        assert response.status_code == 201
        data = response.data['estabelecimento']
        assert data['razao_social'] == 'Farmácia Nova'
        assert data['taxa_entrega'] == '8.00'
        assert data['valor_minimo_entrega'] == '80.00'
        assert len(data['business_hours']) == 7
        assert data['business_hours'][1] == {
            'dia': 1,
            'fechado': False,
            'horario_abertura': '08:00',
            'horario_fechamento': '18:00',
        }
        assert data['enderecos'][0]['estado'] == 'SP'

        assert response.data['usuario']['role'] == User.Role.ESTABLISHMENT
        assert response.data['usuario']['establishment'] == data['id']
        assert 'senha' not in response.data['usuario']

    def test_registered_operator_can_log_in(self, api_client):
        api_client.post(REGISTER_URL, REGISTRATION, format='json')

        response = api_client.post(
            '/api/auth/token/', {'email': REGISTRATION['email'], 'password': REGISTRATION['senha']}, format='json'
        )

        assert response.status_code == 200
        assert response.data['user']['role'] == User.Role.ESTABLISHMENT

    def test_address_is_optional(self, api_client):
        response = api_client.post(REGISTER_URL, REGISTRATION, format='json')

        assert response.status_code == 201
        assert response.data['estabelecimento']['enderecos'] == []

    def test_duplicate_email(self, api_client, client_user):
        response = api_client.post(REGISTER_URL, dict(REGISTRATION, email=client_user.email), format='json')

        assert response.status_code == 400
        assert 'email' in response.data
        assert not Establishment.objects.filter(name='Farmácia Nova').exists()

    def test_short_password(self, api_client):
        response = api_client.post(REGISTER_URL, dict(REGISTRATION, senha='123'), format='json')
        assert response.status_code == 400

    def test_negative_fee(self, api_client):
        response = api_client.post(REGISTER_URL, dict(REGISTRATION, taxa_entrega='-1.00'), format='json')

        assert response.status_code == 400
        assert 'taxa_entrega' in response.data

    def test_name_required(self, api_client):
        payload = {key: value for key, value in REGISTRATION.items() if key != 'razao_social'}

        response = api_client.post(REGISTER_URL, payload, format='json')

        assert response.status_code == 400
        assert 'razao_social' in response.data


@pytest.mark.django_db
class TestEstablishmentUpdateAPI:
    """Test PATCH /api/establishments/{id}/"""

    def test_operator_updates_delivery_policy(self, operator_api, establishment):
        response = operator_api.patch(
            establishment_url(establishment),
            {'taxa_entrega': '12.50', 'valor_minimo_entrega': '100.00'},
            format='json',
        )

        assert response.status_code == 200
        assert response.data['taxa_entrega'] == '12.50'
        assert response.data['valor_minimo_entrega'] == '100.00'
        establishment.refresh_from_db()
        assert establishment.delivery_fee == Decimal('12.50')
        assert establishment.free_delivery_threshold == Decimal('100.00')

    def test_cart_totals_follow_new_threshold(self, operator_api, client_api, client_user, filled_cart, establishment):
        operator_api.patch(establishment_url(establishment), {'valor_minimo_entrega': '100.00'}, format='json')

        response = client_api.get(f'/api/cart/{client_user.id}/')

        assert response.data['totais'] == {'subtotal': '60.00', 'delivery_fee': '10.00', 'total': '70.00'}

    def test_negative_threshold_rejected(self, operator_api, establishment):
        response = operator_api.patch(establishment_url(establishment), {'valor_minimo_entrega': '-5'}, format='json')

        assert response.status_code == 400
        establishment.refresh_from_db()
        assert establishment.free_delivery_threshold == Decimal('50.00')

    def test_other_operator_forbidden(self, other_operator_api, establishment):
        response = other_operator_api.patch(establishment_url(establishment), {'taxa_entrega': '0'}, format='json')
        assert response.status_code == 403

    def test_client_forbidden(self, client_api, establishment):
        response = client_api.patch(establishment_url(establishment), {'taxa_entrega': '0'}, format='json')
        assert response.status_code == 403

    def test_anonymous_rejected(self, api_client, establishment):
        response = api_client.patch(establishment_url(establishment), {'taxa_entrega': '0'}, format='json')
        assert response.status_code == 401


@pytest.mark.django_db
class TestEstablishmentAddressAPI:
    """Test /api/establishments/{id}/addresses/"""

    def test_operator_adds_address(self, operator_api, establishment):
        response = operator_api.post(establishment_url(establishment, 'addresses/'), ADDRESS, format='json')

        assert response.status_code == 201
        assert response.data['estado'] == 'SP'
        assert EstablishmentAddress.objects.filter(establishment=establishment).count() == 1

    def test_addresses_are_public(self, api_client, establishment):
        EstablishmentAddress.objects.create(
            establishment=establishment, street='Rua A', number='1', district='Centro',
            city='São Paulo', state='SP', postal_code='01001-000',
        )

        response = api_client.get(establishment_url(establishment, 'addresses/'))

        assert response.status_code == 200
        assert [a['logradouro'] for a in response.data] == ['Rua A']

    def test_invalid_cep(self, operator_api, establishment):
        response = operator_api.post(
            establishment_url(establishment, 'addresses/'), dict(ADDRESS, cep='123'), format='json'
        )
        assert response.status_code == 400

    def test_other_operator_cannot_add(self, other_operator_api, establishment):
        response = other_operator_api.post(establishment_url(establishment, 'addresses/'), ADDRESS, format='json')
        assert response.status_code == 403

    def test_operator_removes_address(self, operator_api, establishment):
        address = EstablishmentAddress.objects.create(
            establishment=establishment, street='Rua A', number='1', district='Centro',
            city='São Paulo', state='SP', postal_code='01001-000',
        )

        response = operator_api.delete(establishment_url(establishment, f'addresses/{address.id}/'))

        assert response.status_code == 204
        assert not EstablishmentAddress.objects.exists()

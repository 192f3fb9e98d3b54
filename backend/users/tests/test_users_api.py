"""
User API Tests

Token login, client registration, the current-user endpoint and
delivery addresses.
"""

import pytest

from users.models import Address, User

TOKEN_URL = '/api/auth/token/'


@pytest.mark.django_db
class TestTokenAPI:
    """Test JWT login"""

    def test_login_returns_tokens_and_user(self, api_client, operator_user, establishment):
        response = api_client.post(
            TOKEN_URL, {'email': 'operador@farmacia.com', 'password': 'password123'}, format='json'
        )

        assert response.status_code == 200
        assert 'access' in response.data
        assert 'refresh' in response.data
        assert response.data['user']['role'] == 'ESTABLISHMENT'
        assert response.data['user']['establishment'] == establishment.id

    def test_wrong_password(self, api_client, client_user):
        response = api_client.post(TOKEN_URL, {'email': 'cliente@example.com', 'password': 'nope'}, format='json')
        assert response.status_code == 401

    def test_refresh(self, api_client, client_user):
        login = api_client.post(
            TOKEN_URL, {'email': 'cliente@example.com', 'password': 'password123'}, format='json'
        )

        response = api_client.post(f'{TOKEN_URL}refresh/', {'refresh': login.data['refresh']}, format='json')

        assert response.status_code == 200
        assert 'access' in response.data


@pytest.mark.django_db
class TestRegistrationAPI:
    """Test POST /api/users/register/"""

    def test_register_client(self, api_client):
        response = api_client.post('/api/users/register/', {
            'email': 'nova@example.com',
            'name': 'Nova Cliente',
            'phone_number': '11 98888-7777',
            'password': 'segredo123',
        }, format='json')

        assert response.status_code == 201
        assert 'password' not in response.data

        user = User.objects.get(email='nova@example.com')
        assert user.role == User.Role.CLIENT
        assert user.check_password('segredo123')

    def test_short_password(self, api_client):
        response = api_client.post(
            '/api/users/register/', {'email': 'nova@example.com', 'password': '123'}, format='json'
        )
        assert response.status_code == 400

    def test_duplicate_email(self, api_client, client_user):
        response = api_client.post(
            '/api/users/register/', {'email': 'cliente@example.com', 'password': 'segredo123'}, format='json'
        )
        assert response.status_code == 400


@pytest.mark.django_db
class TestCurrentUserAPI:

    def test_me(self, client_api, client_user):
        response = client_api.get('/api/users/me/')

        assert response.status_code == 200
        assert response.data['email'] == 'cliente@example.com'
        assert response.data['role'] == 'CLIENT'
        assert response.data['establishment'] is None

    def test_anonymous(self, api_client):
        assert api_client.get('/api/users/me/').status_code == 401


@pytest.mark.django_db
class TestAddressAPI:
    """Test the client's delivery addresses"""

    def test_list_only_own(self, client_api, address, other_client_user):
        Address.objects.create(
            user=other_client_user, street='Rua B', number='1', district='Centro',
            city='Campinas', state='SP', postal_code='13010-000',
        )

        response = client_api.get('/api/users/addresses/')

        assert response.status_code == 200
        assert [a['id'] for a in response.data] == [address.id]

    def test_create(self, client_api, client_user):
        response = client_api.post('/api/users/addresses/', {
            'logradouro': 'Av. Paulista',
            'numero': '1000',
            'bairro': 'Bela Vista',
            'cidade': 'São Paulo',
            'estado': 'sp',
            'cep': '01310-100',
        }, format='json')

        assert response.status_code == 201
        address = client_user.addresses.get()
        assert address.state == 'SP'
        assert address.postal_code == '01310-100'

    def test_invalid_postal_code(self, client_api):
        response = client_api.post('/api/users/addresses/', {
            'logradouro': 'Av. Paulista',
            'numero': '1000',
            'bairro': 'Bela Vista',
            'cidade': 'São Paulo',
            'estado': 'SP',
            'cep': '0131',
        }, format='json')

        assert response.status_code == 400
        assert 'cep' in response.data

    def test_other_clients_address_not_found(self, other_client_api, address):
        assert other_client_api.get(f'/api/users/addresses/{address.id}/').status_code == 404

    def test_delete(self, client_api, address):
        response = client_api.delete(f'/api/users/addresses/{address.id}/')

        assert response.status_code == 204
        assert not Address.objects.filter(pk=address.id).exists()

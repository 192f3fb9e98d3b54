import pytest

from payments.models import PaymentMethod


@pytest.mark.django_db
class TestPaymentMethodsAPI:
    """Test GET /api/payments/methods/"""

    def test_seeded_methods_listed(self, api_client):
        response = api_client.get('/api/payments/methods/')

        assert response.status_code == 200
        assert {m['nome'] for m in response.data} >= {'Pix', 'Dinheiro'}

    def test_inactive_methods_hidden(self, api_client, payment_method):
        PaymentMethod.objects.filter(pk=payment_method.pk).update(is_active=False)

        response = api_client.get('/api/payments/methods/')

        assert 'Pix' not in {m['nome'] for m in response.data}

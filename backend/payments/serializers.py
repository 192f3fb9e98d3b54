from rest_framework import serializers

from core_backend.base.serializers import BaseModelSerializer

from .models import PaymentMethod


class PaymentMethodSerializer(BaseModelSerializer):
    nome = serializers.CharField(source='name', read_only=True)

    class Meta:
        model = PaymentMethod
        fields = ['id', 'nome']

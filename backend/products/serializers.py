from decimal import Decimal

from rest_framework import serializers

from core_backend.base.serializers import BaseModelSerializer

from .models import CatalogItem


class CatalogItemSerializer(BaseModelSerializer):
    nome = serializers.CharField(source='name')
    apresentacao = serializers.CharField(source='presentation')
    descricao = serializers.CharField(source='description')
    valor_venda = serializers.DecimalField(source='price', max_digits=10, decimal_places=2)
    estabelecimento_id = serializers.IntegerField(source='establishment_id')
    disponivel = serializers.BooleanField(source='is_available')

    class Meta:
        model = CatalogItem
        fields = ['id', 'nome', 'apresentacao', 'descricao', 'valor_venda', 'estabelecimento_id', 'disponivel']
        read_only_fields = fields


class CatalogItemWriteSerializer(BaseModelSerializer):
    """Fields an operator sets when listing or editing a catalog item."""

    nome = serializers.CharField(source='name', max_length=200)
    apresentacao = serializers.CharField(source='presentation', max_length=200, required=False, allow_blank=True)
    descricao = serializers.CharField(source='description', required=False, allow_blank=True)
    valor_venda = serializers.DecimalField(
        source='price', max_digits=10, decimal_places=2, min_value=Decimal('0.00')
    )
    disponivel = serializers.BooleanField(source='is_available', required=False)

    class Meta:
        model = CatalogItem
        fields = ['nome', 'apresentacao', 'descricao', 'valor_venda', 'disponivel']

"""
Cart serializers for API representation.

Prices and totals are computed on every read from the current catalog;
nothing price-related is stored on the cart.
"""
from rest_framework import serializers

from core_backend.base.serializers import BaseModelSerializer
from establishments.models import Establishment
from orders.calculators import CartLine, PricingCalculator
from products.serializers import CatalogItemSerializer

from .models import Cart, CartItem
from .services import CartService


class CartEstablishmentSerializer(BaseModelSerializer):
    """Delivery policy of the establishment the cart is bound to."""

    razao_social = serializers.CharField(source='name', read_only=True)
    taxa_entrega = serializers.DecimalField(source='delivery_fee', max_digits=10, decimal_places=2, read_only=True)
    valor_minimo_entrega = serializers.DecimalField(
        source='free_delivery_threshold', max_digits=10, decimal_places=2, read_only=True
    )

    class Meta:
        model = Establishment
        fields = ['id', 'razao_social', 'taxa_entrega', 'valor_minimo_entrega']


class CartItemSerializer(BaseModelSerializer):
    idcarrinho_item = serializers.IntegerField(source='id', read_only=True)
    quantidade = serializers.IntegerField(source='quantity', read_only=True)
    catalogo_produto = CatalogItemSerializer(source='catalog_item', read_only=True)
    subtotal = serializers.SerializerMethodField()

    class Meta:
        model = CartItem
        fields = ['idcarrinho_item', 'quantidade', 'catalogo_produto', 'subtotal']

    def get_subtotal(self, obj):
        line = CartLine(
            catalog_item_id=obj.catalog_item_id,
            unit_price=obj.catalog_item.price,
            quantity=obj.quantity,
        )
        return str(PricingCalculator.line_total(line))


class CartSerializer(BaseModelSerializer):
    idcarrinho = serializers.IntegerField(source='id', read_only=True)
    cliente_id = serializers.IntegerField(source='client_id', read_only=True)
    estabelecimento = CartEstablishmentSerializer(source='establishment', read_only=True)
    itens = CartItemSerializer(source='items', many=True, read_only=True)
    totais = serializers.SerializerMethodField()

    class Meta:
        model = Cart
        fields = ['idcarrinho', 'cliente_id', 'estabelecimento', 'itens', 'totais', 'updated_at']

    def get_totais(self, obj):
        return CartService.get_totals(obj).to_dict()


class AddToCartSerializer(serializers.Serializer):
    catalogo_produto_id = serializers.IntegerField()
    quantidade = serializers.IntegerField(min_value=1, default=1)


class UpdateCartItemSerializer(serializers.Serializer):
    # Zero or less removes the item
    quantidade = serializers.IntegerField()

from rest_framework import serializers

from cart.models import Cart
from core_backend.base.serializers import BaseModelSerializer
from payments.models import PaymentMethod
from payments.serializers import PaymentMethodSerializer
from users.models import Address
from users.serializers import AddressSerializer, ClientSummarySerializer

from ..models import Order, OrderItem
from ..status import OrderStatusMachine


class OrderItemSerializer(BaseModelSerializer):
    idpedido_item = serializers.IntegerField(source='id', read_only=True)
    catalogo_produto_id = serializers.IntegerField(source='catalog_item_id', read_only=True)
    nome = serializers.CharField(source='name', read_only=True)
    quantidade = serializers.IntegerField(source='quantity', read_only=True)
    valor_unitario_venda = serializers.DecimalField(
        source='unit_price', max_digits=10, decimal_places=2, read_only=True
    )
    subtotal = serializers.DecimalField(source='total_price', max_digits=10, decimal_places=2, read_only=True)

    class Meta:
        model = OrderItem
        fields = ['idpedido_item', 'catalogo_produto_id', 'nome', 'quantidade', 'valor_unitario_venda', 'subtotal']


class OrderSerializer(BaseModelSerializer):
    """
    Order as read by both the client app and the establishment dashboard.

    ``transicoes_permitidas`` lists the statuses an operator may move the
    order to next.
    """

    idpedido = serializers.IntegerField(source='id', read_only=True)
    estabelecimento_id = serializers.IntegerField(source='establishment_id', read_only=True)
    cliente = ClientSummarySerializer(source='client', read_only=True)
    endereco_cliente = AddressSerializer(source='address', read_only=True)
    forma_pagamento = PaymentMethodSerializer(source='payment_method', read_only=True)
    pedido_itens = OrderItemSerializer(source='items', many=True, read_only=True)
    data_pedido = serializers.DateTimeField(source='placed_at', read_only=True)
    observacoes = serializers.CharField(source='notes', read_only=True)
    taxa_entrega = serializers.DecimalField(source='delivery_fee', max_digits=10, decimal_places=2, read_only=True)
    valor_total = serializers.DecimalField(source='total', max_digits=10, decimal_places=2, read_only=True)
    transicoes_permitidas = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'idpedido',
            'estabelecimento_id',
            'status',
            'data_pedido',
            'updated_at',
            'cliente',
            'endereco_cliente',
            'forma_pagamento',
            'pedido_itens',
            'observacoes',
            'subtotal',
            'taxa_entrega',
            'valor_total',
            'transicoes_permitidas',
        ]
        read_only_fields = fields
        select_related_fields = ['client', 'address', 'payment_method']
        prefetch_related_fields = ['items']

    def get_transicoes_permitidas(self, obj):
        current = OrderStatusMachine.decode_status(obj.status)
        return [status.value for status in OrderStatusMachine.allowed_targets(current)]


class CheckoutSerializer(serializers.Serializer):
    """
    Request body for POST /api/orders/:
    {
        "carrinho_id": 3,
        "endereco_id": 7,
        "forma_pagamento_id": 1,
        "observacoes": "Interfone 12"
    }
    """

    carrinho_id = serializers.IntegerField()
    endereco_id = serializers.IntegerField()
    forma_pagamento_id = serializers.IntegerField()
    observacoes = serializers.CharField(required=False, allow_blank=True, default='')

    def _client(self):
        return self.context['request'].user

    def validate_carrinho_id(self, value):
        try:
            return Cart.objects.get(pk=value, client=self._client())
        except Cart.DoesNotExist:
            raise serializers.ValidationError("Cart not found.")

    def validate_endereco_id(self, value):
        try:
            return Address.objects.get(pk=value, user=self._client())
        except Address.DoesNotExist:
            raise serializers.ValidationError("Address not found.")

    def validate_forma_pagamento_id(self, value):
        try:
            return PaymentMethod.objects.get(pk=value, is_active=True)
        except PaymentMethod.DoesNotExist:
            raise serializers.ValidationError("Payment method not available.")

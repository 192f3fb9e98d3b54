import logging

from django.db.models import Q
from rest_framework import mixins, permissions, status, viewsets
from rest_framework.request import Request
from rest_framework.response import Response

from core_backend.base import OptimizedQuerysetMixin
from orders.models import Order
from orders.serializers import CheckoutSerializer, OrderSerializer
from orders.services import OrderService
from users.permissions import IsOrderParticipant

from .status_actions import StatusActionsMixin

logger = logging.getLogger(__name__)


class OrderViewSet(OptimizedQuerysetMixin, StatusActionsMixin, mixins.RetrieveModelMixin, viewsets.GenericViewSet):
    """
    create:   POST /api/orders/       checkout the client's cart
    retrieve: GET  /api/orders/{id}/
    update:   PUT  /api/orders/{id}/  status transition
    """

    queryset = Order.objects.all()
    serializer_class = OrderSerializer
    permission_classes = [permissions.IsAuthenticated, IsOrderParticipant]

    def get_queryset(self):
        user = self.request.user
        queryset = super().get_queryset()
        if user.is_staff:
            return queryset

        visible = Q(client=user)
        if user.is_operator:
            visible |= Q(establishment_id=user.establishment_id)
        return queryset.filter(visible)

    def create(self, request: Request) -> Response:
        serializer = CheckoutSerializer(data=request.data, context={'request': request})
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        order = OrderService.create_order_from_cart(
            cart=data['carrinho_id'],
            address=data['endereco_id'],
            payment_method=data['forma_pagamento_id'],
            notes=data['observacoes'],
        )
        return Response(OrderSerializer(order).data, status=status.HTTP_201_CREATED)

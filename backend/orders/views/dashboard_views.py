from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, permissions
from rest_framework.response import Response
from rest_framework.views import APIView

from business_hours.services import BusinessHoursService
from establishments.models import Establishment
from orders.filters import OrderFilter
from orders.serializers import DailyStatsSerializer, OrderSerializer
from orders.services import DashboardService, OrderService
from users.models import User
from users.permissions import IsClientSelf, IsEstablishmentOperator


class EstablishmentOrderListView(generics.ListAPIView):
    """All orders of an establishment, newest first. Filterable by status and date."""

    serializer_class = OrderSerializer
    permission_classes = [permissions.IsAuthenticated, IsEstablishmentOperator]
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter

    def get_queryset(self):
        establishment = get_object_or_404(Establishment, pk=self.kwargs['establishment_id'])
        return OrderService.orders_for_establishment(establishment).order_by('-placed_at')


class EstablishmentDashboardView(APIView):
    """
    Live order queue plus today's statistics.

    While the establishment is closed the queue is empty; statistics are
    always reported.
    """

    permission_classes = [permissions.IsAuthenticated, IsEstablishmentOperator]

    def get(self, request, establishment_id):
        establishment = get_object_or_404(Establishment, pk=establishment_id)
        dashboard = DashboardService(establishment)

        return Response({
            'aberto': BusinessHoursService(establishment).is_open(),
            'pedidos': OrderSerializer(dashboard.live_orders(), many=True).data,
            'estatisticas': DailyStatsSerializer(dashboard.daily_stats()).data,
        })


class ClientOrderListView(generics.ListAPIView):
    """Order history of a client, newest first."""

    serializer_class = OrderSerializer
    permission_classes = [permissions.IsAuthenticated, IsClientSelf]
    filter_backends = [DjangoFilterBackend]
    filterset_class = OrderFilter

    def get_queryset(self):
        client = get_object_or_404(User, pk=self.kwargs['client_id'])
        return OrderService.orders_for_client(client).order_by('-placed_at')

import logging

from django.shortcuts import get_object_or_404
from rest_framework import filters, mixins, permissions, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from core_backend.base import OptimizedQuerysetMixin
from users.permissions import IsEstablishmentOperator
from users.serializers import UserSerializer

from .models import Establishment, EstablishmentAddress
from .serializers import (
    EstablishmentAddressSerializer,
    EstablishmentDetailSerializer,
    EstablishmentRegistrationSerializer,
    EstablishmentSerializer,
    EstablishmentUpdateSerializer,
)
from .services import EstablishmentService

logger = logging.getLogger(__name__)


class EstablishmentViewSet(
    OptimizedQuerysetMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.UpdateModelMixin,
    viewsets.GenericViewSet,
):
    """
    Public listing of active establishments, plus onboarding and profile edits.

    list:           GET   /api/establishments/
    retrieve:       GET   /api/establishments/{id}/
    register:       POST  /api/establishments/register/
    partial_update: PATCH /api/establishments/{id}/  (operators of that establishment)
    """

    queryset = Establishment.objects.filter(is_active=True)
    filter_backends = [filters.SearchFilter, filters.OrderingFilter]
    search_fields = ['name']
    ordering_fields = ['name', 'delivery_fee']

    def get_permissions(self):
        if self.action in ['update', 'partial_update']:
            return [permissions.IsAuthenticated(), IsEstablishmentOperator()]
        return [permissions.AllowAny()]

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return EstablishmentDetailSerializer
        if self.action in ['update', 'partial_update']:
            return EstablishmentUpdateSerializer
        if self.action == 'register':
            return EstablishmentRegistrationSerializer
        return EstablishmentSerializer

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        establishment = self.get_object()

        serializer = self.get_serializer(establishment, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        EstablishmentService.update_profile(establishment, **serializer.validated_data)
        logger.info(f"User {request.user.pk} updated establishment {establishment.pk}")

        establishment = Establishment.objects.prefetch_related('business_hours', 'addresses').get(pk=establishment.pk)
        return Response(EstablishmentDetailSerializer(establishment, context=self.get_serializer_context()).data)

    @action(detail=False, methods=['post'])
    def register(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        establishment_data, operator_data, address_data = serializer.split()
        establishment, operator = EstablishmentService.register(establishment_data, operator_data, address_data)

        establishment = Establishment.objects.prefetch_related('business_hours', 'addresses').get(pk=establishment.pk)
        return Response(
            {
                'estabelecimento': EstablishmentDetailSerializer(
                    establishment, context=self.get_serializer_context()
                ).data,
                'usuario': UserSerializer(operator).data,
            },
            status=status.HTTP_201_CREATED,
        )


class EstablishmentAddressViewSet(viewsets.ModelViewSet):
    """
    Addresses of an establishment.

    Anyone may read them; only the establishment's operators may change them.
    """

    serializer_class = EstablishmentAddressSerializer

    def get_permissions(self):
        if self.action in ['create', 'update', 'partial_update', 'destroy']:
            return [permissions.IsAuthenticated(), IsEstablishmentOperator()]
        return [permissions.AllowAny()]

    def get_establishment(self):
        return get_object_or_404(Establishment, pk=self.kwargs['establishment_id'])

    def get_queryset(self):
        return EstablishmentAddress.objects.filter(establishment_id=self.kwargs['establishment_id'])

    def perform_create(self, serializer):
        address = serializer.save(establishment=self.get_establishment())
        logger.info(f"Address {address.pk} added to establishment {address.establishment_id}")

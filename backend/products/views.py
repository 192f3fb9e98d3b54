from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, permissions, status
from rest_framework.filters import SearchFilter
from rest_framework.response import Response

from establishments.models import Establishment
from users.permissions import IsEstablishmentOperator

from .filters import CatalogItemFilter
from .models import CatalogItem
from .serializers import CatalogItemSerializer, CatalogItemWriteSerializer
from .services import CatalogService


class EstablishmentCatalogMixin:
    """
    Catalog items of the establishment in the URL.

    Shoppers see available items of active establishments; the
    establishment's own operators also see what they have switched off.
    """

    def get_permissions(self):
        if self.request.method in permissions.SAFE_METHODS:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), IsEstablishmentOperator()]

    def is_own_catalog(self):
        user = self.request.user
        return (
            user.is_authenticated
            and user.is_operator
            and user.establishment_id == int(self.kwargs['establishment_id'])
        )

    def get_establishment(self):
        if self.is_own_catalog():
            return get_object_or_404(Establishment, pk=self.kwargs['establishment_id'])
        return get_object_or_404(Establishment, pk=self.kwargs['establishment_id'], is_active=True)

    def get_queryset(self):
        queryset = CatalogItem.objects.filter(establishment=self.get_establishment())
        if not self.is_own_catalog():
            queryset = queryset.filter(is_available=True)
        return queryset


class EstablishmentCatalogView(EstablishmentCatalogMixin, generics.ListCreateAPIView):
    """
    Catalog of one establishment.

    GET  /api/establishments/{id}/catalog/
    POST /api/establishments/{id}/catalog/  (operators of that establishment)
    """

    serializer_class = CatalogItemSerializer
    filter_backends = [DjangoFilterBackend, SearchFilter]
    filterset_class = CatalogItemFilter
    search_fields = ['name', 'presentation']

    def create(self, request, *args, **kwargs):
        serializer = CatalogItemWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = CatalogService.add_item(self.get_establishment(), **serializer.validated_data)
        return Response(CatalogItemSerializer(item).data, status=status.HTTP_201_CREATED)


class CatalogItemDetailView(EstablishmentCatalogMixin, generics.RetrieveUpdateDestroyAPIView):
    """
    One catalog item.

    GET          /api/establishments/{id}/catalog/{item_id}/
    PUT / PATCH  change name, presentation, price or availability
    DELETE       take the item off the catalog
    """

    serializer_class = CatalogItemSerializer

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        item = self.get_object()

        serializer = CatalogItemWriteSerializer(item, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        item = CatalogService.update_item(item, **serializer.validated_data)
        return Response(CatalogItemSerializer(item).data)

    def perform_destroy(self, instance):
        CatalogService.remove_item(instance)

"""
Cart API views.

Every endpoint is scoped to /api/cart/{client_id}/ and only the client
themselves may use it.
"""
import logging

from django.shortcuts import get_object_or_404
from rest_framework import permissions, status, viewsets
from rest_framework.response import Response

from products.models import CatalogItem
from users.permissions import IsClientSelf

from .models import Cart, CartItem
from .serializers import AddToCartSerializer, CartSerializer, UpdateCartItemSerializer
from .services import CartService

logger = logging.getLogger(__name__)


class CartViewSet(viewsets.ViewSet):
    """
    Endpoints:
    - GET /api/cart/{client_id}/ - Retrieve cart with computed totals
    - DELETE /api/cart/{client_id}/ - Clear all items
    - POST /api/cart/{client_id}/items/ - Add item to cart
    - PATCH /api/cart/{client_id}/items/{item_id}/ - Set item quantity
    - DELETE /api/cart/{client_id}/items/{item_id}/ - Remove item from cart
    """

    permission_classes = [permissions.IsAuthenticated, IsClientSelf]

    def _get_cart(self, request) -> Cart:
        return CartService.get_or_create_cart(request.user)

    def _cart_response(self, cart, status_code=status.HTTP_200_OK):
        cart = Cart.objects.prefetch_related('items__catalog_item').select_related('establishment').get(pk=cart.pk)
        return Response(CartSerializer(cart).data, status=status_code)

    def retrieve(self, request, client_id=None):
        return self._cart_response(self._get_cart(request))

    def clear(self, request, client_id=None):
        cart = self._get_cart(request)
        CartService.clear_cart(cart)
        return self._cart_response(cart)

    def add_item(self, request, client_id=None):
        """
        Request body:
        {
            "catalogo_produto_id": 12,
            "quantidade": 1
        }
        """
        serializer = AddToCartSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = self._get_cart(request)
        catalog_item = get_object_or_404(CatalogItem, pk=serializer.validated_data['catalogo_produto_id'])

        CartService.add_item(cart, catalog_item, serializer.validated_data['quantidade'])
        return self._cart_response(cart, status.HTTP_201_CREATED)

    def update_item(self, request, client_id=None, item_id=None):
        serializer = UpdateCartItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        cart = self._get_cart(request)
        cart_item = get_object_or_404(CartItem, pk=item_id, cart=cart)

        CartService.update_item_quantity(cart_item, serializer.validated_data['quantidade'])
        return self._cart_response(cart)

    def remove_item(self, request, client_id=None, item_id=None):
        cart = self._get_cart(request)
        cart_item = get_object_or_404(CartItem, pk=item_id, cart=cart)

        CartService.remove_item(cart_item)
        return self._cart_response(cart)

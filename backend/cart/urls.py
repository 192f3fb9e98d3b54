"""
URL configuration for cart app.
"""

from django.urls import path

from .views import CartViewSet

app_name = 'cart'

urlpatterns = [
    # GET/DELETE /api/cart/{client_id}/ - Retrieve or clear the cart
    path(
        '<int:client_id>/',
        CartViewSet.as_view({'get': 'retrieve', 'delete': 'clear'}),
        name='cart-detail',
    ),

    # POST /api/cart/{client_id}/items/ - Add item to cart
    path('<int:client_id>/items/', CartViewSet.as_view({'post': 'add_item'}), name='cart-add-item'),

    # PATCH/DELETE /api/cart/{client_id}/items/{item_id}/ - Update or remove an item
    path(
        '<int:client_id>/items/<int:item_id>/',
        CartViewSet.as_view({'patch': 'update_item', 'delete': 'remove_item'}),
        name='cart-item',
    ),
]

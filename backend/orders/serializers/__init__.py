"""
Orders serializers package - modular serializer layer.
"""

from .order_serializers import (
    CheckoutSerializer,
    OrderItemSerializer,
    OrderSerializer,
)
from .status_serializers import (
    DailyStatsSerializer,
    UpdateOrderStatusSerializer,
)

__all__ = [
    'CheckoutSerializer',
    'OrderItemSerializer',
    'OrderSerializer',
    'DailyStatsSerializer',
    'UpdateOrderStatusSerializer',
]

import logging

from rest_framework.exceptions import PermissionDenied
from rest_framework.request import Request
from rest_framework.response import Response

from orders.serializers import OrderSerializer, UpdateOrderStatusSerializer
from orders.services import OrderService
from orders.status import OrderStatus

logger = logging.getLogger(__name__)


class StatusActionsMixin:
    """
    Mixin for order status transitions

    This mixin provides the update action for OrderViewSet.
    """

    def update(self, request: Request, pk=None) -> Response:
        """
        PUT /api/orders/{id}/ with {"status": "<label>"}

        Operators of the order's establishment may apply any legal transition;
        the client who placed the order may only cancel it. An illegal move
        is answered with 409 and leaves the order unchanged.
        """
        order = self.get_object()

        serializer = UpdateOrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        new_status = serializer.validated_data['status']

        user = request.user
        is_operator = user.is_operator and user.establishment_id == order.establishment_id
        if not (is_operator or user.is_staff) and new_status != OrderStatus.CANCELLED:
            logger.warning(f"User {user.pk} tried to set order {order.pk} to '{new_status}'")
            raise PermissionDenied("Only the establishment can change this order's status.")

        order = OrderService.update_order_status(order, new_status)
        return Response(OrderSerializer(order).data)

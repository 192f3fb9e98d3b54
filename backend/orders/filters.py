import django_filters

from .models import Order
from .status import OrderStatus


class OrderFilter(django_filters.FilterSet):
    """
    Filters for order listings.

    ?status=Em Rota
    ?placed_after=2025-03-01&placed_before=2025-03-31
    """

    status = django_filters.ChoiceFilter(choices=OrderStatus.choices)
    placed_after = django_filters.IsoDateTimeFilter(field_name='placed_at', lookup_expr='gte')
    placed_before = django_filters.IsoDateTimeFilter(field_name='placed_at', lookup_expr='lte')
    placed_on = django_filters.DateFilter(field_name='placed_at', lookup_expr='date')

    class Meta:
        model = Order
        fields = ['status', 'placed_after', 'placed_before', 'placed_on']

"""
Orders views package.
"""

from .order_viewset import OrderViewSet
from .dashboard_views import (
    ClientOrderListView,
    EstablishmentDashboardView,
    EstablishmentOrderListView,
)

__all__ = [
    'OrderViewSet',
    'ClientOrderListView',
    'EstablishmentDashboardView',
    'EstablishmentOrderListView',
]

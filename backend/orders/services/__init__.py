"""
Orders services package.

- OrderService: checkout and status transitions
- DashboardService: live order queue and daily statistics
"""

from .order_service import OrderService
from .dashboard_service import DashboardService

__all__ = [
    'OrderService',
    'DashboardService',
]

"""
Core backend base components.

Foundational classes shared by the marketplace apps.
"""

from .mixins import OptimizedQuerysetMixin
from .serializers import BaseModelSerializer

__all__ = [
    'BaseModelSerializer',
    'OptimizedQuerysetMixin',
]

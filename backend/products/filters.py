from django_filters import rest_framework as filters

from .models import CatalogItem


class CatalogItemFilter(filters.FilterSet):
    name = filters.CharFilter(field_name='name', lookup_expr='icontains')
    min_price = filters.NumberFilter(field_name='price', lookup_expr='gte')
    max_price = filters.NumberFilter(field_name='price', lookup_expr='lte')

    class Meta:
        model = CatalogItem
        fields = ['name', 'min_price', 'max_price']

from django.contrib import admin

from .models import CatalogItem


@admin.register(CatalogItem)
class CatalogItemAdmin(admin.ModelAdmin):
    list_display = ['name', 'presentation', 'establishment', 'price', 'is_available']
    list_filter = ['is_available', 'establishment']
    search_fields = ['name', 'presentation']
    list_select_related = ['establishment']

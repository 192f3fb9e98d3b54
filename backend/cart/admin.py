from django.contrib import admin

from .models import Cart, CartItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    raw_id_fields = ['catalog_item']


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ['client', 'establishment', 'last_activity']
    search_fields = ['client__email']
    inlines = [CartItemInline]

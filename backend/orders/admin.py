from django.contrib import admin

from payments.money import format_money

from .models import Order, OrderItem


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ("name", "unit_price", "quantity", "get_line_item_total")
    fields = ("name", "unit_price", "quantity", "get_line_item_total")

    def get_line_item_total(self, obj):
        return format_money(obj.total_price)

    get_line_item_total.short_description = "Line Item Total"

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """
    Admin configuration for the Order model.
    """

    list_display = ("id", "establishment", "client", "status", "total", "placed_at")
    list_filter = ("status", "establishment")
    search_fields = ("id", "client__email", "client__name")
    readonly_fields = ("subtotal", "delivery_fee", "total", "placed_at", "updated_at")
    list_select_related = ("establishment", "client")
    inlines = [OrderItemInline]

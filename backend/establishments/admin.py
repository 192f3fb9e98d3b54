from django.contrib import admin

from business_hours.admin import BusinessHoursInline
from business_hours.services import BusinessHoursService

from .models import Establishment, EstablishmentAddress


class EstablishmentAddressInline(admin.StackedInline):
    model = EstablishmentAddress
    extra = 0


@admin.register(Establishment)
class EstablishmentAdmin(admin.ModelAdmin):
    list_display = ['name', 'phone', 'delivery_fee', 'free_delivery_threshold', 'timezone', 'is_active']
    list_filter = ['is_active', 'timezone']
    search_fields = ['name', 'phone']
    inlines = [BusinessHoursInline, EstablishmentAddressInline]
    fieldsets = (
        (None, {'fields': ('name', 'phone', 'logo_url', 'is_active')}),
        ('Delivery', {'fields': ('delivery_fee', 'free_delivery_threshold', 'coverage_radius_km')}),
        ('Hours', {'fields': ('timezone',)}),
    )

    def save_related(self, request, form, formsets, change):
        super().save_related(request, form, formsets, change)
        if not change:
            # Weekdays left blank in the inline get the default hours
            BusinessHoursService(form.instance).create_default_week()

from django.contrib import admin

from .models import BusinessHours


class BusinessHoursInline(admin.TabularInline):
    """Inline admin for the weekly hours of an establishment"""
    model = BusinessHours
    extra = 0
    max_num = 7  # Only 7 days in a week
    fields = ['weekday', 'is_closed', 'opening_time', 'closing_time']
    ordering = ['weekday']


@admin.register(BusinessHours)
class BusinessHoursAdmin(admin.ModelAdmin):
    list_display = ['establishment', 'weekday', 'is_closed', 'opening_time', 'closing_time']
    list_filter = ['weekday', 'is_closed']
    search_fields = ['establishment__name']
    ordering = ['establishment', 'weekday']

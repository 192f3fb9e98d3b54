from django.urls import path

from . import views

app_name = 'business_hours'

# Mounted under /api/establishments/
urlpatterns = [
    path('<int:establishment_id>/status/', views.EstablishmentStatusView.as_view(), name='status'),
    path('<int:establishment_id>/hours/', views.EstablishmentHoursView.as_view(), name='hours'),
]

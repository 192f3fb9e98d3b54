from django.urls import path

from .views import CatalogItemDetailView, EstablishmentCatalogView

app_name = 'products'

# Mounted under /api/establishments/
urlpatterns = [
    path('<int:establishment_id>/catalog/', EstablishmentCatalogView.as_view(), name='catalog'),
    path('<int:establishment_id>/catalog/<int:pk>/', CatalogItemDetailView.as_view(), name='catalog-item'),
]

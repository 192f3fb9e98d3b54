from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import EstablishmentAddressViewSet, EstablishmentViewSet

app_name = 'establishments'

router = SimpleRouter()
router.register(r'', EstablishmentViewSet, basename='establishment')

address_list = EstablishmentAddressViewSet.as_view({'get': 'list', 'post': 'create'})
address_detail = EstablishmentAddressViewSet.as_view({
    'get': 'retrieve',
    'put': 'update',
    'patch': 'partial_update',
    'delete': 'destroy',
})

urlpatterns = [
    path('', include('business_hours.urls')),
    path('', include('products.urls')),
    path('<int:establishment_id>/addresses/', address_list, name='address-list'),
    path('<int:establishment_id>/addresses/<int:pk>/', address_detail, name='address-detail'),
    path('', include(router.urls)),
]

from django.urls import path

from .views import AddressViewSet, ClientRegistrationView, CurrentUserView

app_name = "users"

urlpatterns = [
    path("register/", ClientRegistrationView.as_view(), name="register"),
    path("me/", CurrentUserView.as_view(), name="me"),
    path("addresses/", AddressViewSet.as_view({'get': 'list', 'post': 'create'}), name="address-list"),
    path("addresses/<int:pk>/", AddressViewSet.as_view({
        'get': 'retrieve',
        'put': 'update',
        'patch': 'partial_update',
        'delete': 'destroy'
    }), name="address-detail"),
]

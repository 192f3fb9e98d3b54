from django.urls import path

from .views import (
    ClientOrderListView,
    EstablishmentDashboardView,
    EstablishmentOrderListView,
    OrderViewSet,
)

app_name = "orders"

urlpatterns = [
    path("", OrderViewSet.as_view({"post": "create"}), name="order-create"),
    path(
        "establishment/<int:establishment_id>/",
        EstablishmentOrderListView.as_view(),
        name="establishment-orders",
    ),
    path(
        "establishment/<int:establishment_id>/dashboard/",
        EstablishmentDashboardView.as_view(),
        name="establishment-dashboard",
    ),
    path("client/<int:client_id>/", ClientOrderListView.as_view(), name="client-orders"),
    path("<int:pk>/", OrderViewSet.as_view({"get": "retrieve", "put": "update"}), name="order-detail"),
]

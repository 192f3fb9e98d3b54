from django.urls import path

from .views import PaymentMethodListView

app_name = "payments"

urlpatterns = [
    path("methods/", PaymentMethodListView.as_view(), name="payment-method-list"),
]

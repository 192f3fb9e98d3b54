from rest_framework import generics, permissions

from .models import PaymentMethod
from .serializers import PaymentMethodSerializer


class PaymentMethodListView(generics.ListAPIView):
    """Active payment methods offered at checkout."""

    serializer_class = PaymentMethodSerializer
    permission_classes = [permissions.AllowAny]
    queryset = PaymentMethod.objects.filter(is_active=True)

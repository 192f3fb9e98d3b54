import logging

from django.shortcuts import get_object_or_404
from rest_framework import permissions, status
from rest_framework.response import Response
from rest_framework.views import APIView

from establishments.models import Establishment
from users.permissions import IsEstablishmentOperator

from .serializers import BusinessHoursSerializer, BusinessHoursStatusSerializer, DayHoursInputSerializer
from .services import BusinessHoursService

logger = logging.getLogger(__name__)


class EstablishmentStatusView(APIView):
    """Current open/closed status of an establishment"""
    permission_classes = [permissions.AllowAny]

    def get(self, request, establishment_id):
        establishment = get_object_or_404(Establishment, pk=establishment_id, is_active=True)
        summary = BusinessHoursService(establishment).get_status_summary()
        return Response(BusinessHoursStatusSerializer(summary).data)


class EstablishmentHoursView(APIView):
    """
    Weekly hours of an establishment.

    GET lists the stored days; PATCH replaces the whole week and expects
    exactly seven entries.
    """

    def get_permissions(self):
        if self.request.method in permissions.SAFE_METHODS:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), IsEstablishmentOperator()]

    def get(self, request, establishment_id):
        establishment = get_object_or_404(Establishment, pk=establishment_id)
        rows = establishment.business_hours.order_by('weekday')
        return Response(BusinessHoursSerializer(rows, many=True).data)

    def patch(self, request, establishment_id):
        establishment = get_object_or_404(Establishment, pk=establishment_id)

        serializer = DayHoursInputSerializer(data=request.data, many=True)
        serializer.is_valid(raise_exception=True)

        BusinessHoursService(establishment).replace_week(serializer.to_schedule_days())
        logger.info(f"User {request.user.pk} updated hours of establishment {establishment.pk}")

        rows = establishment.business_hours.order_by('weekday')
        return Response(BusinessHoursSerializer(rows, many=True).data, status=status.HTTP_200_OK)

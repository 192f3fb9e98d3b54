from datetime import time

from rest_framework import serializers

from core_backend.base.serializers import BaseModelSerializer

from .models import BusinessHours
from .schedule import DaySchedule

TIME_INPUT_FORMATS = ['%H:%M', '%H:%M:%S']


class BusinessHoursSerializer(BaseModelSerializer):
    """One weekday of hours, using the field names the mobile app reads."""

    dia = serializers.IntegerField(source='weekday', read_only=True)
    fechado = serializers.BooleanField(source='is_closed', read_only=True)
    horario_abertura = serializers.TimeField(source='opening_time', format='%H:%M', read_only=True)
    horario_fechamento = serializers.TimeField(source='closing_time', format='%H:%M', read_only=True)

    class Meta:
        model = BusinessHours
        fields = ['dia', 'fechado', 'horario_abertura', 'horario_fechamento']


class WeekHoursListSerializer(serializers.ListSerializer):
    """Validates that a submitted week has each weekday exactly once."""

    def validate(self, attrs):
        weekdays = [entry['dia'] for entry in attrs]
        if len(weekdays) != 7 or set(weekdays) != set(range(7)):
            raise serializers.ValidationError(
                "Business hours must contain exactly one entry for each weekday (0-6)."
            )
        return attrs

    def to_schedule_days(self):
        return [DaySchedule(
            weekday=entry['dia'],
            closed=entry['fechado'],
            open_time=entry['horario_abertura'].strftime('%H:%M'),
            close_time=entry['horario_fechamento'].strftime('%H:%M'),
        ) for entry in self.validated_data]


class DayHoursInputSerializer(serializers.Serializer):
    """Input for one weekday in a bulk hours update."""

    dia = serializers.IntegerField(min_value=0, max_value=6)
    fechado = serializers.BooleanField(default=False)
    horario_abertura = serializers.TimeField(input_formats=TIME_INPUT_FORMATS, required=False)
    horario_fechamento = serializers.TimeField(input_formats=TIME_INPUT_FORMATS, required=False)

    class Meta:
        list_serializer_class = WeekHoursListSerializer

    def validate(self, attrs):
        if attrs.get('fechado'):
            # Times are kept but ignored for closed days
            attrs.setdefault('horario_abertura', time(0, 0))
            attrs.setdefault('horario_fechamento', time(0, 0))
            return attrs

        if 'horario_abertura' not in attrs or 'horario_fechamento' not in attrs:
            raise serializers.ValidationError(
                "Opening and closing times are required for days that are not closed."
            )
        return attrs


class BusinessHoursStatusSerializer(serializers.Serializer):
    """Serializer for the establishment status endpoint"""

    aberto = serializers.BooleanField(source='is_open')
    horario_atual = serializers.SerializerMethodField()
    fuso_horario = serializers.CharField(source='timezone')
    proxima_abertura = serializers.SerializerMethodField()
    avisos = serializers.ListField(source='warnings', child=serializers.CharField())

    # Rendered in the establishment's own offset, not converted to UTC
    def get_horario_atual(self, obj):
        return obj['current_time'].isoformat()

    def get_proxima_abertura(self, obj):
        next_opening = obj.get('next_opening')
        return next_opening.isoformat() if next_opening else None

from rest_framework import serializers

from ..dashboard import format_duration
from ..status import OrderStatus


class UpdateOrderStatusSerializer(serializers.Serializer):
    """
    Validates the requested status label.

    Whether the move is allowed from the current status is decided by
    OrderStatusMachine, not here.
    """

    status = serializers.ChoiceField(choices=OrderStatus.choices)


class DailyStatsSerializer(serializers.Serializer):
    pedidos_hoje = serializers.IntegerField(source='orders_today')
    tempo_medio = serializers.SerializerMethodField()
    tempo_medio_minutos = serializers.SerializerMethodField()
    faturamento = serializers.DecimalField(source='revenue', max_digits=12, decimal_places=2)

    def get_tempo_medio(self, obj):
        return format_duration(obj.average_handling_time)

    def get_tempo_medio_minutos(self, obj):
        if obj.average_handling_time is None:
            return None
        return int(obj.average_handling_time.total_seconds() // 60)

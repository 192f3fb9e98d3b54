from decimal import Decimal

from rest_framework import serializers

from business_hours.availability import AvailabilityEvaluator
from business_hours.serializers import BusinessHoursSerializer
from business_hours.services import BusinessHoursService
from core_backend.base.serializers import BaseModelSerializer
from users.models import User

from .models import Establishment, EstablishmentAddress


class EstablishmentAddressSerializer(BaseModelSerializer):
    logradouro = serializers.CharField(source='street', max_length=200)
    numero = serializers.CharField(source='number', max_length=20)
    complemento = serializers.CharField(source='complement', max_length=100, required=False, allow_blank=True)
    bairro = serializers.CharField(source='district', max_length=100)
    cidade = serializers.CharField(source='city', max_length=100)
    estado = serializers.CharField(source='state', max_length=2)
    cep = serializers.RegexField(source='postal_code', regex=r'^\d{5}-?\d{3}$')
    latitude = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)
    longitude = serializers.DecimalField(max_digits=9, decimal_places=6, required=False, allow_null=True)

    class Meta:
        model = EstablishmentAddress
        fields = [
            'id', 'logradouro', 'numero', 'complemento', 'bairro', 'cidade', 'estado', 'cep',
            'latitude', 'longitude',
        ]

    def validate_estado(self, value):
        return value.upper()


class EstablishmentSerializer(BaseModelSerializer):
    """
    Establishment as listed in the storefront.

    ``aberto`` is evaluated on every read from the prefetched hours, in the
    establishment's own timezone.
    """

    razao_social = serializers.CharField(source='name')
    telefone_contato = serializers.CharField(source='phone')
    raio_cobertura = serializers.DecimalField(source='coverage_radius_km', max_digits=6, decimal_places=2)
    taxa_entrega = serializers.DecimalField(source='delivery_fee', max_digits=10, decimal_places=2)
    valor_minimo_entrega = serializers.DecimalField(
        source='free_delivery_threshold', max_digits=10, decimal_places=2
    )
    aberto = serializers.SerializerMethodField()

    class Meta:
        model = Establishment
        fields = [
            'id',
            'razao_social',
            'telefone_contato',
            'raio_cobertura',
            'taxa_entrega',
            'valor_minimo_entrega',
            'timezone',
            'logo_url',
            'aberto',
        ]
        read_only_fields = fields
        prefetch_related_fields = ['business_hours']

    def get_aberto(self, obj):
        schedule = BusinessHoursService.schedule_from_rows(obj.business_hours.all())
        return AvailabilityEvaluator.is_open(schedule, obj.localize(self.context.get('at')))


class EstablishmentDetailSerializer(EstablishmentSerializer):
    business_hours = BusinessHoursSerializer(many=True, read_only=True)
    enderecos = EstablishmentAddressSerializer(source='addresses', many=True, read_only=True)

    class Meta(EstablishmentSerializer.Meta):
        fields = EstablishmentSerializer.Meta.fields + ['business_hours', 'enderecos']
        read_only_fields = fields
        prefetch_related_fields = ['business_hours', 'addresses']


class EstablishmentUpdateSerializer(BaseModelSerializer):
    """Profile fields an operator may change, delivery policy included."""

    razao_social = serializers.CharField(source='name', max_length=200, required=False)
    telefone_contato = serializers.CharField(source='phone', max_length=20, required=False, allow_blank=True)
    raio_cobertura = serializers.DecimalField(
        source='coverage_radius_km', max_digits=6, decimal_places=2, min_value=Decimal('0.00'), required=False
    )
    taxa_entrega = serializers.DecimalField(
        source='delivery_fee', max_digits=10, decimal_places=2, min_value=Decimal('0.00'), required=False
    )
    valor_minimo_entrega = serializers.DecimalField(
        source='free_delivery_threshold', max_digits=10, decimal_places=2, min_value=Decimal('0.00'), required=False
    )

    class Meta:
        model = Establishment
        fields = [
            'razao_social',
            'telefone_contato',
            'raio_cobertura',
            'taxa_entrega',
            'valor_minimo_entrega',
            'timezone',
            'logo_url',
        ]
        extra_kwargs = {
            'timezone': {'required': False},
            'logo_url': {'required': False},
        }


class EstablishmentRegistrationSerializer(EstablishmentUpdateSerializer):
    """
    Sign-up of a pharmacy: the establishment plus its operator login.

    The operator signs in afterwards through /api/auth/token/.
    """

    razao_social = serializers.CharField(source='name', max_length=200)
    email = serializers.EmailField(write_only=True)
    senha = serializers.CharField(write_only=True, min_length=8, style={'input_type': 'password'})
    nome_responsavel = serializers.CharField(write_only=True, max_length=150, required=False, allow_blank=True)
    endereco = EstablishmentAddressSerializer(write_only=True, required=False)

    class Meta(EstablishmentUpdateSerializer.Meta):
        fields = EstablishmentUpdateSerializer.Meta.fields + ['email', 'senha', 'nome_responsavel', 'endereco']

    def validate_email(self, value):
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("A user with this email already exists.")
        return value

    def split(self):
        """(establishment fields, operator fields, address fields or None) from validated data."""
        data = dict(self.validated_data)
        operator = {
            'email': data.pop('email'),
            'password': data.pop('senha'),
            'name': data.pop('nome_responsavel', ''),
            'phone_number': data.get('phone', ''),
        }
        address = data.pop('endereco', None)
        return data, operator, address

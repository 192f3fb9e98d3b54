from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from core_backend.base.serializers import BaseModelSerializer

from .models import Address, User


class UserSerializer(BaseModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'phone_number', 'role', 'establishment']
        read_only_fields = fields


class ClientRegistrationSerializer(BaseModelSerializer):
    password = serializers.CharField(write_only=True, min_length=8, style={'input_type': 'password'})

    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'phone_number', 'password']

    def create(self, validated_data):
        return User.objects.create_user(role=User.Role.CLIENT, **validated_data)


class ClientSummarySerializer(BaseModelSerializer):
    """Client as shown on an order card."""

    nome = serializers.CharField(source='name', read_only=True)
    numero_contato = serializers.CharField(source='phone_number', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'nome', 'numero_contato']


class AddressSerializer(BaseModelSerializer):
    logradouro = serializers.CharField(source='street', max_length=200)
    numero = serializers.CharField(source='number', max_length=20)
    complemento = serializers.CharField(source='complement', max_length=100, required=False, allow_blank=True)
    bairro = serializers.CharField(source='district', max_length=100)
    cidade = serializers.CharField(source='city', max_length=100)
    estado = serializers.CharField(source='state', max_length=2)
    cep = serializers.RegexField(source='postal_code', regex=r'^\d{5}-?\d{3}$')
    principal = serializers.BooleanField(source='is_default', required=False)

    class Meta:
        model = Address
        fields = ['id', 'logradouro', 'numero', 'complemento', 'bairro', 'cidade', 'estado', 'cep', 'principal']

    def validate_estado(self, value):
        return value.upper()


class MarketplaceTokenObtainPairSerializer(TokenObtainPairSerializer):
    """JWT pair plus the user record, so the app knows the role and establishment."""

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)
        token['role'] = user.role
        token['establishment_id'] = user.establishment_id
        return token

    def validate(self, attrs):
        data = super().validate(attrs)
        data["user"] = UserSerializer(self.user).data
        return data

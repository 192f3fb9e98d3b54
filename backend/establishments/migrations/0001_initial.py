from decimal import Decimal

import django.core.validators
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Establishment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=200, verbose_name='corporate name')),
                ('phone', models.CharField(blank=True, max_length=20, verbose_name='contact phone')),
                ('coverage_radius_km', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=6, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='coverage radius (km)')),
                ('delivery_fee', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='delivery fee')),
                ('free_delivery_threshold', models.DecimalField(decimal_places=2, default=Decimal('0.00'), help_text='Orders with a subtotal at or above this amount ship free.', max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))], verbose_name='free delivery threshold')),
                ('timezone', models.CharField(choices=[('America/Sao_Paulo', 'Brasília Time'), ('America/Bahia', 'Bahia Time'), ('America/Fortaleza', 'Fortaleza Time'), ('America/Recife', 'Recife Time'), ('America/Belem', 'Belém Time'), ('America/Manaus', 'Amazon Time'), ('America/Cuiaba', 'Cuiabá Time'), ('America/Campo_Grande', 'Campo Grande Time'), ('America/Porto_Velho', 'Porto Velho Time'), ('America/Boa_Vista', 'Boa Vista Time'), ('America/Rio_Branco', 'Acre Time'), ('America/Noronha', 'Fernando de Noronha Time'), ('UTC', 'UTC')], default='America/Sao_Paulo', help_text='Business hours are interpreted in this timezone.', max_length=50)),
                ('logo_url', models.URLField(blank=True)),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Establishment',
                'verbose_name_plural': 'Establishments',
                'ordering': ['name'],
            },
        ),
    ]

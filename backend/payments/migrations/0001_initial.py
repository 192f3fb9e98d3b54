"""
Initial migration for payments app.

Creates PaymentMethod and seeds the methods offered at checkout.
"""
from django.db import migrations, models


def seed_payment_methods(apps, schema_editor):
    PaymentMethod = apps.get_model('payments', 'PaymentMethod')
    for name in ("Pix", "Cartão de crédito", "Cartão de débito", "Dinheiro"):
        PaymentMethod.objects.get_or_create(name=name)


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='PaymentMethod',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True, verbose_name='name')),
                ('is_active', models.BooleanField(default=True)),
            ],
            options={
                'ordering': ['name'],
            },
        ),
        migrations.RunPython(seed_payment_methods, migrations.RunPython.noop),
    ]

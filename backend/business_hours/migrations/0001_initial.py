import datetime

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('establishments', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='BusinessHours',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('weekday', models.PositiveSmallIntegerField(choices=[(0, 'Sunday'), (1, 'Monday'), (2, 'Tuesday'), (3, 'Wednesday'), (4, 'Thursday'), (5, 'Friday'), (6, 'Saturday')], help_text='0 = Sunday ... 6 = Saturday', validators=[django.core.validators.MinValueValidator(0), django.core.validators.MaxValueValidator(6)])),
                ('is_closed', models.BooleanField(default=False)),
                ('opening_time', models.TimeField(default=datetime.time(0, 0))),
                ('closing_time', models.TimeField(default=datetime.time(0, 0), help_text='May be earlier than the opening time for windows that cross midnight.')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('establishment', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='business_hours', to='establishments.establishment')),
            ],
            options={
                'verbose_name': 'Business hours',
                'verbose_name_plural': 'Business hours',
                'ordering': ['establishment', 'weekday'],
                'constraints': [models.UniqueConstraint(fields=('establishment', 'weekday'), name='unique_business_hours_per_weekday')],
            },
        ),
    ]

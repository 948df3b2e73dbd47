import uuid
from decimal import Decimal

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Trip',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('destination', models.CharField(db_index=True, max_length=200)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('description', models.TextField(blank=True)),
                ('status', models.CharField(choices=[('active', 'Active'), ('upcoming', 'Upcoming'), ('completed', 'Completed')], default='upcoming', max_length=20)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'trips',
                'ordering': ['start_date', 'name'],
                'indexes': [models.Index(fields=['status', 'start_date'], name='trips_status_start_idx')],
            },
        ),
        migrations.CreateModel(
            name='Tour',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('date', models.DateField()),
                ('time', models.TimeField(blank=True, null=True)),
                ('price', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0.00'))])),
                ('prices', models.JSONField(blank=True, null=True)),
                ('is_free', models.BooleanField(default=False)),
                ('description', models.TextField(blank=True)),
                ('image_url', models.URLField(blank=True, max_length=500)),
                ('tags', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('trip', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tours', to='trips.trip')),
            ],
            options={
                'db_table': 'tours',
                'ordering': ['date', 'time', 'name'],
                'indexes': [
                    models.Index(fields=['trip', 'date'], name='tours_trip_date_idx'),
                    models.Index(fields=['price'], name='tours_price_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='TourLink',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('title', models.CharField(max_length=200)),
                ('url', models.URLField(max_length=500)),
                ('position', models.PositiveIntegerField(default=0)),
                ('tour', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='links', to='trips.tour')),
                ('trip', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='links', to='trips.trip')),
            ],
            options={
                'db_table': 'tour_links',
                'ordering': ['position'],
                'constraints': [
                    models.CheckConstraint(
                        condition=models.Q(models.Q(('tour__isnull', True), ('trip__isnull', False)), models.Q(('tour__isnull', False), ('trip__isnull', True)), _connector='OR'),
                        name='tour_links_single_owner',
                    ),
                ],
            },
        ),
    ]

import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('trips', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Group',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('members', models.JSONField(blank=True, default=list)),
                ('leader_name', models.CharField(max_length=200)),
                ('leader_email', models.EmailField(blank=True, max_length=254)),
                ('leader_phone', models.CharField(blank=True, max_length=30)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('leader', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='led_groups', to=settings.AUTH_USER_MODEL)),
                ('trip', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='groups', to='trips.trip')),
            ],
            options={
                'db_table': 'groups',
                'ordering': ['name'],
                'indexes': [models.Index(fields=['trip', 'name'], name='groups_trip_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='TourAttendance',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('record', models.JSONField(blank=True, default=list)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('group', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='tour_attendance', to='groups.group')),
                ('tour', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='attendance', to='trips.tour')),
            ],
            options={
                'db_table': 'tour_attendance',
                'indexes': [models.Index(fields=['tour'], name='tour_attendance_tour_idx')],
                'unique_together': {('group', 'tour')},
            },
        ),
    ]

# Generated manually for the sales app

import uuid
from decimal import Decimal
from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='RedemptionToken',
            fields=[
                ('code', models.CharField(max_length=8, primary_key=True, serialize=False)),
                ('usage_count', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('redeemed_at', models.DateTimeField(blank=True, null=True)),
                ('issued_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='issued_tokens', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'qr_codes',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['created_at'], name='qr_codes_created_at_idx')],
            },
        ),
        migrations.CreateModel(
            name='SaleRecord',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('payer_name', models.CharField(max_length=255)),
                ('group_label', models.CharField(db_column='class', max_length=50)),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('line_items', models.JSONField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('token', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='sales', to='sales.redemptiontoken')),
            ],
            options={
                'db_table': 'sales_entries',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['created_at'], name='sales_entries_created_at_idx'),
                    models.Index(fields=['group_label'], name='sales_entries_class_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('total_amount__gte', 0)), name='sales_entries_total_non_negative'),
                ],
            },
        ),
    ]

# Generated manually for the catalog app

from decimal import Decimal
from django.core.validators import MinValueValidator
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Book',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('class_label', models.CharField(db_column='class', max_length=50)),
                ('subject', models.CharField(max_length=100)),
                ('title', models.CharField(max_length=255)),
                ('price', models.DecimalField(decimal_places=2, max_digits=10, validators=[MinValueValidator(Decimal('0.00'))])),
                ('is_book', models.BooleanField()),
            ],
            options={
                'db_table': 'books',
                'ordering': ['class_label', 'subject', 'title'],
                'constraints': [
                    models.UniqueConstraint(fields=('class_label', 'subject', 'title'), name='books_class_subject_title_uniq'),
                    models.CheckConstraint(condition=models.Q(('price__gte', 0)), name='books_price_non_negative'),
                ],
            },
        ),
    ]

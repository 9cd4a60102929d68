import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Judge',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(max_length=16, unique=True, verbose_name='Código')),
                ('full_name', models.CharField(max_length=160, verbose_name='Nombre completo')),
                ('pin_hash', models.CharField(editable=False, max_length=128)),
                ('is_active', models.BooleanField(default=True)),
                ('evaluation_method', models.CharField(blank=True, choices=[('checkbox', 'Selección (checkbox)'), ('scoring', 'Puntuación')], max_length=16, null=True)),
                ('evaluation_method_set_at', models.DateTimeField(blank=True, editable=False, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
            ],
            options={
                'ordering': ('full_name', 'id'),
            },
        ),
    ]

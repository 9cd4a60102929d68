import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('registration', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ScopeFinalization',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('scope', models.CharField(max_length=32, unique=True)),
                ('finalized_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('finalized_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='accounts.judge')),
            ],
            options={
                'ordering': ('scope',),
            },
        ),
        migrations.CreateModel(
            name='Selection',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('scope', models.CharField(db_index=True, max_length=32)),
                ('rank', models.PositiveSmallIntegerField()),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='+', to='accounts.judge')),
                ('submission', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='selections', to='registration.submission')),
            ],
            options={
                'ordering': ('scope', 'rank'),
                'constraints': [
                    models.UniqueConstraint(fields=('scope', 'submission'), name='uniq_selection_scope_submission'),
                    models.UniqueConstraint(fields=('scope', 'rank'), name='uniq_selection_scope_rank'),
                ],
            },
        ),
    ]

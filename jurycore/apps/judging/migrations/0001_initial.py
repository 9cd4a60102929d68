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
            name='JuryEvaluation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('evaluation_method', models.CharField(choices=[('checkbox', 'Selección (checkbox)'), ('scoring', 'Puntuación')], max_length=16)),
                ('selected', models.BooleanField(default=False)),
                ('score1', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('score2', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('score3', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('score4', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('comments', models.TextField(blank=True, default='')),
                ('is_finalized', models.BooleanField(default=False)),
                ('finalized_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('judge', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='evaluations', to='accounts.judge')),
                ('submission', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='evaluations', to='registration.submission')),
            ],
            options={
                'ordering': ('judge_id', '-updated_at'),
                'constraints': [models.UniqueConstraint(fields=('judge', 'submission'), name='uniq_evaluation_judge_submission')],
            },
        ),
    ]

import django.core.validators
import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


def _score_field():
    return models.PositiveSmallIntegerField(
        validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(10)]
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
        ('registration', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='ScoreRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('scope', models.CharField(db_index=True, max_length=32)),
                ('score1', _score_field()),
                ('score2', _score_field()),
                ('score3', _score_field()),
                ('score4', _score_field()),
                ('comments', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now, editable=False)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('judge', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='score_records', to='accounts.judge')),
                ('submission', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='score_records', to='registration.submission')),
            ],
            options={
                'ordering': ('scope', 'submission_id', 'judge__full_name'),
                'constraints': [
                    models.UniqueConstraint(fields=('judge', 'submission', 'scope'), name='uniq_score_judge_submission_scope'),
                    models.CheckConstraint(condition=models.Q(('score1__gte', 1), ('score1__lte', 10)), name='scorerecord_score1_range'),
                    models.CheckConstraint(condition=models.Q(('score2__gte', 1), ('score2__lte', 10)), name='scorerecord_score2_range'),
                    models.CheckConstraint(condition=models.Q(('score3__gte', 1), ('score3__lte', 10)), name='scorerecord_score3_range'),
                    models.CheckConstraint(condition=models.Q(('score4__gte', 1), ('score4__lte', 10)), name='scorerecord_score4_range'),
                ],
            },
        ),
    ]

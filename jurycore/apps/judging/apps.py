from django.apps import AppConfig


class JudgingConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "jurycore.apps.judging"
    verbose_name = "Evaluación de jurados"

from django.apps import AppConfig


class SelectionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "jurycore.apps.selections"
    verbose_name = "Selecciones"

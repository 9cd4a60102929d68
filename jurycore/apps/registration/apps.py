from django.apps import AppConfig


class RegistrationConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "jurycore.apps.registration"
    verbose_name = "Postulaciones"

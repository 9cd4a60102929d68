from django.apps import AppConfig


class LeaderboardConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "jurycore.apps.leaderboard"
    verbose_name = "Resultados"

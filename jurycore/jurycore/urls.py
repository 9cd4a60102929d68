from django.contrib import admin
from django.urls import include, path

from jurycore.apps.accounts import views as account_views
from jurycore.apps.accounts.urls import api_urlpatterns as accounts_api
from jurycore.apps.core import views as core_views
from jurycore.apps.judging.urls import api_urlpatterns as judging_api
from jurycore.apps.leaderboard.urls import api_urlpatterns as leaderboard_api
from jurycore.apps.scoring.urls import api_urlpatterns as scoring_api
from jurycore.apps.selections.urls import api_urlpatterns as selections_api

# Panel del administrador del jurado (no confundir con /admin/ de Django)
jury_admin_patterns = [
    path("", include("jurycore.apps.selections.urls")),
    path("", include("jurycore.apps.scoring.urls")),
    path("", include("jurycore.apps.leaderboard.urls")),
]

api_patterns = [
    path("health/", core_views.health, name="api_health"),
    *accounts_api,
    *judging_api,
    *scoring_api,
    *selections_api,
    *leaderboard_api,
]

urlpatterns = [
    path("admin/", admin.site.urls),

    # Home: redirige según el rol del jurado en sesión
    path("", account_views.home, name="home"),

    # Login por PIN, logout, método de evaluación
    path("", include("jurycore.apps.accounts.urls")),

    # Jurado: postulaciones y revisión
    path("", include("jurycore.apps.judging.urls")),

    path("jury-admin/", include(jury_admin_patterns)),
    path("api/", include(api_patterns)),
]

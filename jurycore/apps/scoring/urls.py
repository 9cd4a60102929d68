from django.urls import path

from . import views

urlpatterns = [
    path("scores/<str:scope>/", views.admin_scores, name="jury_admin_scores"),
]

api_urlpatterns = [
    path("scores/", views.api_score_create, name="api_score_create"),
    path("scores/<int:score_id>/", views.api_score_delete, name="api_score_delete"),
    path("scores/<str:scope>/", views.api_scores, name="api_scores"),
]

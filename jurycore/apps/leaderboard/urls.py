from django.urls import path

from . import views

urlpatterns = [
    path("results/<str:scope>/", views.results_page, name="jury_admin_results"),
]

api_urlpatterns = [
    path("results/<str:scope>/", views.api_results, name="api_results"),
]

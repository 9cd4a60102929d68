from django.urls import path

from . import views

urlpatterns = [
    path("selections/<str:scope>/", views.manage_selections, name="jury_admin_selections"),
]

api_urlpatterns = [
    path("selections/<str:scope>/", views.api_selections, name="api_selections"),
    path("selections/<str:scope>/finalize/", views.api_finalize_scope, name="api_finalize_scope"),
]

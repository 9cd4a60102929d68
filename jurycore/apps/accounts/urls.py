from django.urls import path

from . import views

urlpatterns = [
    path("login/", views.login_view, name="login"),
    path("logout/", views.logout_view, name="logout"),
    path("evaluation-method/", views.evaluation_method, name="evaluation_method"),
]

api_urlpatterns = [
    path("auth/", views.api_auth, name="api_auth"),
    path("auth/logout/", views.api_logout, name="api_logout"),
    path("auth/method/", views.api_method, name="api_method"),
    path("auth/profile/", views.api_profile, name="api_profile"),
]

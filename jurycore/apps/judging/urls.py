from django.urls import path

from . import views

urlpatterns = [
    path("submissions/", views.judge_submissions, name="judge_submissions"),
    path("review-selections/", views.review_selections, name="review_selections"),
]

api_urlpatterns = [
    path("submissions/", views.api_submissions, name="api_submissions"),
    path("submissions/selected/", views.api_selected, name="api_selected"),
    path("submissions/finalize/", views.api_finalize, name="api_finalize"),
]

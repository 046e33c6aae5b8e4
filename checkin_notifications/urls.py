"""Root URL configuration."""

from django.urls import include, path

urlpatterns = [
    path("api/v1/checkin/", include("core.urls")),
]

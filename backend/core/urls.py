from django.urls import path, include

from core.views import health
from parish.api.v1.urls import urlpatterns as api_urls

urlpatterns = [
    path("health", health, name="health"),
    path("", include((api_urls, "api"))),
]

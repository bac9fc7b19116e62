"""
URL configuration for core_backend project.

Each app registers its own routers; everything is served under /api/.
"""

from django.contrib import admin
from django.urls import path, include

from .views import health_check

urlpatterns = [
    path("api/health", health_check, name="health_check"),
    path("admin/", admin.site.urls),
    path("api/", include("inventory.urls")),
    # Game sessions live under /api/bar-games/ alongside the games themselves.
    path("api/", include("games.urls")),
    path("api/", include("customers.urls")),
    path("api/", include("memberships.urls")),
    path("api/", include("orders.urls")),
]

handler404 = "core_backend.views.route_not_found"
handler500 = "core_backend.views.server_error"

"""Root URL configuration. Every app mounts its API routes below /api/."""

from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/", include("user_auth_app.api.urls")),
    path("api/", include("profiles.api.urls")),
    path("api/", include("orders.api.urls")),
    path("api/", include("quotes.api.urls")),
    path("api/", include("chat.api.urls")),
    path("api/", include("files.api.urls")),
    path("api/", include("pricing.api.urls")),
    path("api/", include("common.api.urls")),
]

if settings.DEBUG:
    urlpatterns += static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)

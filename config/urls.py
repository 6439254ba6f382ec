from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path("admin/", admin.site.urls),

    # Staff login (JWT) + current user
    path("api/auth/", include("accounts.urls")),

    # Gym API
    path("api/", include("membership.urls")),
    path("api/", include("payments.urls")),
    path("api/", include("activities.urls")),
]

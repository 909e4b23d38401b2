# backend/panel_backend/urls.py
"""
URL configuration for the Language Panel project.
Mounts the admin (where the language line screen lives) and the API.
"""
from django.contrib import admin
from django.urls import path, include

urlpatterns = [
    path('admin/', admin.site.urls),
    path('api/', include('language_lines.urls')),  # Include language line URLs under /api/
]

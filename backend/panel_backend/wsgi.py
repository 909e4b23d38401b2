"""WSGI configuration for the Language Panel deployment."""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "panel_backend.settings")

application = get_wsgi_application()

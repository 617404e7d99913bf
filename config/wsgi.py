"""WSGI entrypoint for Studyboard."""
import os
from django.core.wsgi import get_wsgi_application

# Production deployments set DJANGO_SETTINGS_MODULE=config.settings.prod explicitly.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings.dev")

application = get_wsgi_application()

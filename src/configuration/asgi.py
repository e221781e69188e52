"""
ASGI entry point for the settlement engine API.

The environment is chosen through DJANGO_ENV (development, staging,
production or test); see configuration.settings.
"""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "configuration.settings")

application = get_asgi_application()

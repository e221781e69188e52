"""
WSGI entry point for the settlement engine API.

Set DJANGO_ENV in the web server environment to select the settings module:
    - DJANGO_ENV=development (default) - for local development
    - DJANGO_ENV=production - for production deployments
    - DJANGO_ENV=staging - for staging environment
"""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "configuration.settings")

application = get_wsgi_application()

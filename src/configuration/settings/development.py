# settings/development.py
"""
Local development: DEBUG on, permissive CORS and hosts.

Selected when DJANGO_ENV is development, dev, local or unset. Set
USE_SQLITE=true to run without PostgreSQL; Redis is still expected for the
cache and the Celery broker.
"""

from .base import *
from .components import service_settings

ENVIRONMENT = "development"
DEBUG = True

globals().update(service_settings(cors_debug=True, security_debug=True))

INTERNAL_IPS = ["127.0.0.1", "localhost"]

LOG_LEVEL = os.environ.get("LOG_LEVEL", "DEBUG").upper()

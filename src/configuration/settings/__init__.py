# settings/__init__.py
"""
Loads the settings module for the environment named by DJANGO_ENV.

    development, dev, local (default)  -> development.py
    staging, stage                     -> staging.py
    production, prod                   -> production.py
    test, testing                      -> test.py

Example:
    DJANGO_ENV=production python manage.py migrate
"""

import os
import sys

ENVIRONMENT_ALIASES = {
    "dev": "development",
    "local": "development",
    "stage": "staging",
    "prod": "production",
    "testing": "test",
}

_requested = os.environ.get("DJANGO_ENV", "development").strip().lower()
CURRENT_ENVIRONMENT = ENVIRONMENT_ALIASES.get(_requested, _requested)

# The autoreloader child has RUN_MAIN set; announce once
if not os.environ.get("RUN_MAIN"):
    print(f"[settlement-engine] settings: {CURRENT_ENVIRONMENT}", file=sys.stderr)

if CURRENT_ENVIRONMENT == "production":
    from .production import *  # noqa: F403
elif CURRENT_ENVIRONMENT == "staging":
    from .staging import *  # noqa: F403
elif CURRENT_ENVIRONMENT == "test":
    from .test import *  # noqa: F403
else:
    CURRENT_ENVIRONMENT = "development"
    from .development import *  # noqa: F403

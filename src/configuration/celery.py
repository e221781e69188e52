import os

from celery import Celery

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "configuration.settings")

app = Celery("configuration")

# Picks up every CELERY_* setting, including the beat schedule and task routes
app.config_from_object("django.conf:settings", namespace="CELERY")

app.autodiscover_tasks()

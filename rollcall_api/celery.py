import os

from django.apps import apps

from celery import Celery

from rollcall_api.celerybeat_schedule import CELERYBEAT_SCHEDULE


os.environ.setdefault("DJANGO_SETTINGS_MODULE", "rollcall_api.settings.local_base")

app = Celery("rollcall_api_tasks")
app.config_from_object("django.conf:settings", namespace="CELERY")
app.conf.beat_schedule = CELERYBEAT_SCHEDULE
app.autodiscover_tasks(lambda: [n.name for n in apps.get_app_configs()])

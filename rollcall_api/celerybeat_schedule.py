from celery.schedules import crontab  # type: ignore


CELERYBEAT_SCHEDULE = {
    "advance_activity_events": {
        "schedule": crontab(minute="*/15"),
        "task": "activities.tasks.advance_activity_events_task",
    },
}

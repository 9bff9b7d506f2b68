import logging
from typing import Annotated

from dependency_injector.wiring import Provide, inject

from activities.services import ActivityService
from rollcall_api.celery import app


logger = logging.getLogger(__name__)


@app.task
@inject
def advance_activity_events_task(
    activity_service: Annotated[ActivityService, Provide["activity_service"]],
):
    """
    Periodic task that schedules the next event of every activity whose
    events are all in the past.
    """
    created = activity_service.advance_all_events()
    logger.info("Advanced activity events, %s new events created", created)
    return created

import datetime
import logging
from typing import TypedDict

from django.db import transaction
from django.utils import timezone

from activities.exceptions import EmptyActivityUpdateError, NoOccurrenceError
from activities.models import Activity
from activities.recurrence import first_occurrence_after, validate_recurrence_rule
from events.models import Event
from groups.models import Group


logger = logging.getLogger(__name__)


class ActivityUpdateData(TypedDict, total=False):
    name: str
    recurrence_rule: str
    location: str
    time: datetime.time


UPDATABLE_ACTIVITY_FIELDS = ("name", "recurrence_rule", "location", "time")


class ActivityService:
    @transaction.atomic()
    def create_activity(
        self,
        group: Group,
        name: str,
        recurrence_rule: str,
        time: datetime.time,
        location: str = "",
        now: datetime.datetime | None = None,
    ) -> Activity:
        """
        Create the group's activity together with its first event and link it
        to the group.
        :param group: Group that owns the activity.
        :param recurrence_rule: RRULE string, validated before anything is written.
        :param time: time of day of every occurrence (UTC).
        :param now: reference instant, defaults to the current time.
        :raises NoOccurrenceError: when the rule has no occurrence from `now` on.
        :return: the created Activity.
        """
        now = now or timezone.now()
        rule = validate_recurrence_rule(recurrence_rule)

        activity = Activity.objects.create(
            group=group,
            name=name,
            recurrence_rule=rule,
            location=location or "",
            time=time,
            starts_on=now.date(),
        )
        first_date = first_occurrence_after(rule, now, time, starts_on=activity.starts_on)
        Event.objects.create(activity=activity, group=group, date=first_date)

        group.activity = activity
        group.save(update_fields=["activity", "modified"])
        return activity

    @transaction.atomic()
    def update_activity(self, activity: Activity, data: ActivityUpdateData) -> Activity:
        """
        Apply a partial update limited to the updatable activity fields.
        :param activity: Activity to update.
        :param data: any subset of name, recurrence_rule, location and time.
        :return: the updated Activity.
        """
        changes = {field: data[field] for field in UPDATABLE_ACTIVITY_FIELDS if field in data}
        if not changes:
            raise EmptyActivityUpdateError()

        if "recurrence_rule" in changes:
            changes["recurrence_rule"] = validate_recurrence_rule(changes["recurrence_rule"])

        for field, value in changes.items():
            setattr(activity, field, value)
        activity.save(update_fields=[*changes, "modified"])
        return activity

    @transaction.atomic()
    def delete_activity(self, activity: Activity) -> None:
        """
        Unlink the activity from its group, then delete its events and itself.
        """
        Group.objects.filter(activity=activity).update(activity=None, modified=timezone.now())
        activity.events.all().delete()
        activity.delete()

    @transaction.atomic()
    def advance_event(
        self, activity: Activity, now: datetime.datetime | None = None
    ) -> Event | None:
        """
        Make sure the activity has an event at or after `now`, creating the next
        occurrence when it doesn't.
        :return: the created Event, or None when an upcoming event already exists
            or the rule has no occurrences left.
        """
        now = now or timezone.now()
        activity = Activity.objects.select_for_update().get(pk=activity.pk)
        if activity.events.filter(date__gte=now).exists():
            return None

        try:
            date = first_occurrence_after(
                activity.recurrence_rule, now, activity.time, starts_on=activity.starts_on
            )
        except NoOccurrenceError:
            logger.info("Activity %s has no occurrences left after %s", activity.pk, now)
            return None

        event = Event.objects.create(activity=activity, group_id=activity.group_id, date=date)
        logger.info("Created event %s for activity %s at %s", event.pk, activity.pk, date)
        return event

    def advance_all_events(self, now: datetime.datetime | None = None) -> int:
        """
        Advance every activity linked to a group, each one in its own transaction.
        :return: number of events created.
        """
        now = now or timezone.now()
        created = 0
        for activity in Activity.objects.filter(linked_group__isnull=False).iterator():
            if self.advance_event(activity, now=now) is not None:
                created += 1
        return created

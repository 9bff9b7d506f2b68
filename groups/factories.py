import datetime

from model_bakery import baker

from activities.models import Activity
from events.models import Event
from groups.models import Group, GroupMembership
from users.factories import UserFactory


class GroupFactory:
    def create_group(self, admin=None, members=(), name="Soccer Club", **kwargs) -> Group:
        group = baker.make(Group, name=name, **kwargs)
        GroupMembership.objects.create(
            group=group, user=admin or UserFactory().create_user(), is_admin=True
        )
        for member in members:
            GroupMembership.objects.create(group=group, user=member)
        return group


class ActivityFactory:
    def create_activity(
        self,
        group: Group,
        name="Thursday Game",
        recurrence_rule="FREQ=WEEKLY;BYDAY=TH",
        time=datetime.time(19, 0),
        location="Main field",
        event_dates=(),
        **kwargs,
    ) -> Activity:
        activity = Activity.objects.create(
            group=group,
            name=name,
            recurrence_rule=recurrence_rule,
            time=time,
            location=location,
            **kwargs,
        )
        group.activity = activity
        group.save(update_fields=["activity", "modified"])
        for date in event_dates:
            Event.objects.create(activity=activity, group=group, date=date)
        return activity

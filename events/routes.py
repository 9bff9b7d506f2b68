from common.types import RouteDict

from .views import EventViewSet, GroupUpcomingEventViewSet


routes: list[RouteDict] = [
    {"regex": r"event/group", "viewset": GroupUpcomingEventViewSet, "basename": "GroupEvents"},
    {"regex": r"event", "viewset": EventViewSet, "basename": "Events"},
]

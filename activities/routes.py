from common.types import RouteDict

from .views import ActivityViewSet


routes: list[RouteDict] = [
    {"regex": r"activity", "viewset": ActivityViewSet, "basename": "Activities"},
]

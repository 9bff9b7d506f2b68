from common.types import RouteDict

from .views import GroupViewSet


routes: list[RouteDict] = [
    {"regex": r"group", "viewset": GroupViewSet, "basename": "Groups"},
]

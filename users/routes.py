from common.types import RouteDict

from .views import PublicProfileViewSet, UserViewSet


routes: list[RouteDict] = [
    {"regex": r"users/profile", "viewset": PublicProfileViewSet, "basename": "PublicProfile"},
    {"regex": r"users", "viewset": UserViewSet, "basename": "Users"},
]

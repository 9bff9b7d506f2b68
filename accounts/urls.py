from django.urls import path

from accounts.views import UserSyncWebhookView


urlpatterns = [
    path("users/sync/", UserSyncWebhookView.as_view(), name="user-sync"),
]

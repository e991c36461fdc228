# pos/api/urls.py

from django.urls import path

from pos.api.views import SyncPushView

urlpatterns = [
    path("sync/push/", SyncPushView.as_view(), name="pos-sync-push"),
]

# accounting/api/urls.py

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from accounting.api.views.journal_batches import JournalBatchViewSet

router = DefaultRouter()
router.register("journal-batches", JournalBatchViewSet, basename="journal-batch")

urlpatterns = [
    path("", include(router.urls)),
]

# assets/api/urls.py

from django.urls import path

from assets.api.views import DepreciationRunView

urlpatterns = [
    path("depreciation/run/", DepreciationRunView.as_view(), name="depreciation-run"),
]

# ur_core/api/urls.py
from __future__ import annotations

from rest_framework.routers import DefaultRouter

from ur_core.catalog.api.views import ServiceCatalogViewSet
from ur_core.subscriptions.api.views import AssignmentServicesViewSet

router = DefaultRouter()

router.register(r"services", ServiceCatalogViewSet, basename="services")
router.register(r"assignments", AssignmentServicesViewSet, basename="assignments")

urlpatterns = [
    *router.urls,
]

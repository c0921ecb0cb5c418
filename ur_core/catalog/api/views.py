# ur_core/catalog/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny

from ur_core.catalog.api.serializers import ServiceSerializer
from ur_core.catalog.models import Service
from ur_core.catalog.selectors import available_services, base_services
from ur_core.common.api.pagination import paginate


def _truthy(value: str | None) -> bool:
    return str(value or "").strip().lower() in {"1", "true", "yes"}


class ServiceCatalogViewSet(viewsets.GenericViewSet):
    """
    Public, read-only view of the service catalog.
    """
    serializer_class = ServiceSerializer
    queryset = Service.objects.none()
    permission_classes = [AllowAny]

    @extend_schema(
        tags=["Catalog"],
        responses={200: ServiceSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                name="only_addons",
                type=OpenApiTypes.BOOL,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Only services a tenant can add (excludes base services).",
            ),
        ],
    )
    @action(detail=False, methods=["get"], url_path="available")
    def available(self, request):
        qs = available_services(only_addons=_truthy(request.query_params.get("only_addons")))
        return paginate(request, qs, ServiceSerializer)

    @extend_schema(
        tags=["Catalog"],
        responses={200: ServiceSerializer(many=True)},
    )
    @action(detail=False, methods=["get"], url_path="base")
    def base(self, request):
        return paginate(request, base_services(), ServiceSerializer)

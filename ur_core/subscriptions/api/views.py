# ur_core/subscriptions/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from ur_core.subscriptions.api.serializers import (
    AddServiceSerializer,
    PreInvoiceSentSerializer,
    PreInvoiceSerializer,
    PriceBreakdownSerializer,
    SubscriptionLinkSerializer,
)
from ur_core.subscriptions.notifications import PreInvoiceNotifier
from ur_core.subscriptions.selectors import PricingQueryService
from ur_core.subscriptions.services import SubscriptionService


class AssignmentServicesViewSet(viewsets.ViewSet):
    """
    Thin API layer:
    - validates input with serializers
    - calls PricingQueryService for reads
    - calls SubscriptionService for writes

    Domain errors propagate to the exception handler, which renders the
    error envelope.
    """

    lookup_value_regex = r"\d+"

    @staticmethod
    def _breakdown_response(breakdown, *, http_status=status.HTTP_200_OK) -> Response:
        return Response(PriceBreakdownSerializer(breakdown.as_dict()).data, status=http_status)

    @extend_schema(
        tags=["Subscriptions"],
        methods=["GET"],
        responses={200: SubscriptionLinkSerializer(many=True)},
    )
    @extend_schema(
        tags=["Subscriptions"],
        methods=["POST"],
        request=AddServiceSerializer,
        responses={201: PriceBreakdownSerializer},
    )
    @action(detail=True, methods=["get", "post"], url_path="services")
    def services(self, request, pk=None):
        if request.method == "GET":
            links = PricingQueryService.list_links(assignment_id=int(pk))
            return Response(SubscriptionLinkSerializer(links, many=True).data)

        s = AddServiceSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        breakdown = SubscriptionService.add_service(
            assignment_id=int(pk),
            service_id=s.validated_data["service_id"],
        )
        return self._breakdown_response(breakdown, http_status=status.HTTP_201_CREATED)

    @extend_schema(tags=["Subscriptions"], responses={200: PriceBreakdownSerializer})
    @action(detail=True, methods=["delete"], url_path=r"services/(?P<service_id>\d+)")
    def remove_service(self, request, pk=None, service_id=None):
        breakdown = SubscriptionService.remove_service(
            assignment_id=int(pk),
            service_id=int(service_id),
        )
        return self._breakdown_response(breakdown)

    @extend_schema(tags=["Subscriptions"], responses={200: PriceBreakdownSerializer})
    @action(detail=True, methods=["get"], url_path="price")
    def price(self, request, pk=None):
        breakdown = PricingQueryService.current_breakdown(assignment_id=int(pk))
        return self._breakdown_response(breakdown)

    @extend_schema(tags=["Subscriptions"], responses={200: PreInvoiceSerializer})
    @action(detail=True, methods=["get"], url_path="pre-invoice")
    def pre_invoice(self, request, pk=None):
        projection = PricingQueryService.pre_invoice(assignment_id=int(pk))
        return Response(PreInvoiceSerializer(projection.as_notification_payload()).data)

    @extend_schema(tags=["Subscriptions"], request=None, responses={200: PreInvoiceSentSerializer})
    @action(detail=True, methods=["post"], url_path="pre-invoice/send")
    def send_pre_invoice(self, request, pk=None):
        projection = PreInvoiceNotifier.from_settings().send(assignment_id=int(pk))
        data = {"sent": True, "pre_invoice": projection.as_notification_payload()}
        return Response(PreInvoiceSentSerializer(data).data)

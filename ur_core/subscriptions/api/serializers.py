# ur_core/subscriptions/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from ur_core.subscriptions.models import SubscriptionLink


class SubscriptionLinkSerializer(serializers.ModelSerializer):
    assignment_id = serializers.IntegerField(read_only=True)
    service_id = serializers.IntegerField(read_only=True)
    service_name = serializers.CharField(source="service.name", read_only=True)
    is_base = serializers.BooleanField(source="service.is_base", read_only=True)

    class Meta:
        model = SubscriptionLink
        fields = [
            "id",
            "assignment_id",
            "service_id",
            "service_name",
            "is_base",
            "state",
            "price_snapshot",
            "effective_from",
            "effective_until",
            "added_at",
        ]
        read_only_fields = fields


class AddServiceSerializer(serializers.Serializer):
    service_id = serializers.IntegerField(min_value=1)


class LineItemSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=12, decimal_places=2)
    is_base = serializers.BooleanField()


class PriceBreakdownSerializer(serializers.Serializer):
    base = serializers.DecimalField(max_digits=12, decimal_places=2)
    line_items = LineItemSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)


class PreInvoiceServiceSerializer(serializers.Serializer):
    nombre = serializers.CharField()
    precio = serializers.DecimalField(max_digits=12, decimal_places=2)


class PreInvoiceSerializer(serializers.Serializer):
    """
    Shape consumed by the pre-invoice email.
    """
    nombre_unidad = serializers.CharField()
    precio_base = serializers.DecimalField(max_digits=12, decimal_places=2)
    servicios = PreInvoiceServiceSerializer(many=True)
    precio_total = serializers.DecimalField(max_digits=12, decimal_places=2)
    fecha_corte = serializers.DateTimeField()


class PreInvoiceSentSerializer(serializers.Serializer):
    sent = serializers.BooleanField()
    pre_invoice = PreInvoiceSerializer()

# ur_core/catalog/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from ur_core.catalog.models import Service


class ServiceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Service
        fields = [
            "id",
            "name",
            "unit_price",
            "is_base",
            "is_active",
        ]
        read_only_fields = fields

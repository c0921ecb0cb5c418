# ur_core/rentals/admin.py
from __future__ import annotations

from django.contrib import admin

from ur_core.rentals.models import Assignment, Student, Unit


@admin.register(Student)
class StudentAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "last_name", "email", "created_at")
    search_fields = ("name", "last_name", "email")
    ordering = ("-created_at",)


@admin.register(Unit)
class UnitAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price", "status", "updated_at")
    list_filter = ("status",)
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ("id", "student", "unit", "anchor_date", "created_at")
    search_fields = ("id", "student__email", "unit__name")
    autocomplete_fields = ("student", "unit")
    ordering = ("-anchor_date",)

# ur_core/rentals/selectors.py
from __future__ import annotations

from typing import Any

from ur_core.rentals.models import Assignment, Unit


def get_assignment(*, assignment_id: int, for_update: bool = False) -> Assignment | None:
    qs = Assignment.objects.select_related("unit", "student")
    if for_update:
        # Serializes writers per assignment for the rest of the transaction.
        qs = qs.select_for_update(of=("self",))
    return qs.filter(id=assignment_id).first()


def unit_offered_services(unit: Unit) -> list[Any]:
    offered = unit.offered_services
    if not isinstance(offered, list):
        return []
    return offered


def _normalize_name(value: Any) -> str:
    return str(value).strip().lower()


def is_service_offered(*, unit: Unit, service_id: int, service_name: str) -> bool:
    """
    Membership by id when the entry carries one, otherwise by case-insensitive
    trimmed name.
    """
    wanted_name = _normalize_name(service_name)

    for entry in unit_offered_services(unit):
        if not entry:
            continue

        if isinstance(entry, dict):
            entry_id = entry.get("id")
            if entry_id is not None:
                try:
                    if int(entry_id) == int(service_id):
                        return True
                except (TypeError, ValueError):
                    pass
                continue
            entry_name = entry.get("name")
        else:
            entry_name = entry

        if entry_name is not None and _normalize_name(entry_name) == wanted_name:
            return True

    return False

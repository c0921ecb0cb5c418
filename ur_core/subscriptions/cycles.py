# ur_core/subscriptions/cycles.py
"""
Billing-cycle arithmetic.

A cut is the assignment's anchor advanced by a whole number of calendar
months. Cuts are always computed from the original anchor (anchor + k months)
so a short month never shifts later cuts. When the target month is shorter
than the anchor's day, the day is clamped to the month's last day:

    anchor 2024-01-31 -> 2024-02-29 -> 2024-03-31 -> 2024-04-30

Aware datetimes are evaluated in the configured local time zone so the
wall-clock time of the anchor is kept across DST changes.
"""
from __future__ import annotations

from datetime import datetime

from dateutil.relativedelta import relativedelta
from django.utils import timezone


def _local(value: datetime) -> datetime:
    if timezone.is_aware(value):
        return timezone.localtime(value)
    return value


def _month_span(start: datetime, end: datetime) -> int:
    return (end.year - start.year) * 12 + (end.month - start.month)


def add_months(anchor: datetime, months: int) -> datetime:
    return _local(anchor) + relativedelta(months=months)


def _cut_index_after(anchor: datetime, reference: datetime) -> int:
    """
    Smallest k >= 0 such that add_months(anchor, k) > reference.
    """
    start = _local(anchor)
    ref = _local(reference)

    # Every cut before the month preceding `ref` is already <= ref.
    k = max(0, _month_span(start, ref) - 1)
    while add_months(start, k) <= ref:
        k += 1
    return k


def next_cut_after(anchor: datetime, reference: datetime) -> datetime:
    """
    First cut strictly after `reference`. A future anchor is its own next cut.
    """
    return add_months(anchor, _cut_index_after(anchor, reference))


def current_cut(anchor: datetime, reference: datetime) -> datetime | None:
    """
    Latest cut at or before `reference`; None while the anchor is in the future.
    """
    k = _cut_index_after(anchor, reference)
    if k == 0:
        return None
    return add_months(anchor, k - 1)


def is_cut_day(anchor: datetime, reference: datetime) -> bool:
    """
    True when `reference` falls on this month's cut day (local calendar date),
    whatever the time of day.
    """
    ref = _local(reference)
    k = _month_span(_local(anchor), ref)
    if k < 0:
        return False
    return add_months(anchor, k).date() == ref.date()

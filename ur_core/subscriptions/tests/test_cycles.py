# ur_core/subscriptions/tests/test_cycles.py
from datetime import datetime, timedelta, timezone as dt_timezone

from ur_core.conftest import local_dt
from ur_core.subscriptions.cycles import add_months, current_cut, is_cut_day, next_cut_after


def test_next_cut_is_strictly_after_reference():
    anchor = local_dt(2024, 1, 15)

    assert next_cut_after(anchor, anchor) == local_dt(2024, 2, 15)
    assert next_cut_after(anchor, local_dt(2024, 1, 15, 9, 59)) == anchor


def test_next_cut_mid_cycle():
    anchor = local_dt(2024, 1, 15)

    assert next_cut_after(anchor, local_dt(2024, 2, 3)) == local_dt(2024, 2, 15)
    assert next_cut_after(anchor, local_dt(2024, 2, 15, 10, 0, 1)) == local_dt(2024, 3, 15)


def test_future_anchor_is_its_own_next_cut():
    anchor = local_dt(2024, 6, 1)
    assert next_cut_after(anchor, local_dt(2024, 1, 20)) == anchor


def test_next_cut_far_from_anchor_crosses_years():
    anchor = local_dt(2024, 1, 15)
    assert next_cut_after(anchor, local_dt(2025, 7, 20)) == local_dt(2025, 8, 15)


def test_month_end_anchor_clamps_without_drifting():
    anchor = local_dt(2024, 1, 31)

    assert next_cut_after(anchor, local_dt(2024, 2, 1)) == local_dt(2024, 2, 29)
    assert next_cut_after(anchor, local_dt(2024, 2, 29, 12)) == local_dt(2024, 3, 31)
    assert next_cut_after(anchor, local_dt(2024, 4, 1)) == local_dt(2024, 4, 30)
    assert add_months(anchor, 13) == local_dt(2025, 2, 28)


def test_add_months_keeps_time_of_day():
    anchor = datetime(2024, 1, 15, 22, 45, 30, 123456)
    cut = add_months(anchor, 5)

    assert cut == datetime(2024, 6, 15, 22, 45, 30, 123456)


def test_next_cut_is_the_smallest_month_step_past_reference():
    anchor = local_dt(2024, 1, 31, 8, 30)
    reference = anchor

    for _ in range(500):
        reference = reference + timedelta(hours=17)
        cut = next_cut_after(anchor, reference)

        assert cut > reference
        # one month less would not be past the reference (or would be before the anchor)
        previous = [add_months(anchor, k) for k in range(0, 40) if add_months(anchor, k) < cut]
        assert not previous or max(previous) <= reference


def test_current_cut():
    anchor = local_dt(2024, 1, 15)

    assert current_cut(anchor, local_dt(2024, 1, 10)) is None
    assert current_cut(anchor, anchor) == anchor
    assert current_cut(anchor, local_dt(2024, 3, 20)) == local_dt(2024, 3, 15)
    assert current_cut(anchor, local_dt(2024, 3, 15, 9)) == local_dt(2024, 2, 15)


def test_is_cut_day_ignores_time_of_day():
    anchor = local_dt(2024, 1, 15)

    assert is_cut_day(anchor, local_dt(2024, 1, 15, 18))
    assert is_cut_day(anchor, local_dt(2024, 3, 15, 0, 5))
    assert not is_cut_day(anchor, local_dt(2024, 3, 16))
    assert not is_cut_day(anchor, local_dt(2023, 12, 15))


def test_is_cut_day_on_clamped_month_end():
    anchor = local_dt(2024, 1, 31)

    assert is_cut_day(anchor, local_dt(2024, 2, 29))
    assert not is_cut_day(anchor, local_dt(2024, 2, 28))
    assert is_cut_day(anchor, local_dt(2024, 4, 30))


def test_is_cut_day_uses_local_calendar_date():
    # 23:30 local on Jan 15 is already Jan 16 in UTC.
    anchor = local_dt(2024, 1, 15, 23, 30)
    reference = datetime(2024, 2, 16, 1, 0, tzinfo=dt_timezone.utc)  # Feb 15, 19:00 local

    assert is_cut_day(anchor, reference)
    assert next_cut_after(anchor, reference) == local_dt(2024, 2, 15, 23, 30)

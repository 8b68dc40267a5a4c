from __future__ import annotations

from datetime import date

from src.attendance_analytics.attendance_analytics.analytics.host_ranking import rank_hosts
from src.attendance_analytics.attendance_analytics.analytics.model import DateAggregate
from src.attendance_analytics.attendance_analytics.core.constants import SESSION_NOT_HELD


def agg(day, host, present=0, late=0, absent=0, excused=0, held=True):
    return DateAggregate(
        date=date(2025, 4, day),
        present_count=present,
        late_count=late,
        excused_count=excused,
        unexcused_absent_count=absent,
        attendance_rate=0.0,
        host_location=host,
        session_held=held,
    )


def test_hosts_are_folded_and_ranked_by_frequency():
    hosts = rank_hosts(
        [
            agg(3, "Hall A", present=2, absent=2, excused=1),
            agg(1, "Hall A", present=3, late=1, absent=1),
            agg(2, "Hall B", present=4),
            agg(4, SESSION_NOT_HELD, excused=6, held=False),
            agg(5, None, present=5),
        ]
    )

    assert [(h.rank, h.host_location, h.times_hosted) for h in hosts] == [(1, "Hall A", 2), (2, "Hall B", 1)]

    hall_a = hosts[0]
    assert hall_a.dates == [date(2025, 4, 1), date(2025, 4, 3)]
    assert (hall_a.present, hall_a.late, hall_a.absent, hall_a.excused) == (5, 1, 3, 1)
    assert hall_a.attendance_rate == 66.7
    assert hosts[1].attendance_rate == 100.0


def test_ties_break_on_host_name():
    hosts = rank_hosts([agg(1, "Zeta", present=1), agg(2, "Alpha", present=1)])

    assert [h.host_location for h in hosts] == ["Alpha", "Zeta"]


def test_host_with_nobody_accountable_has_zero_rate():
    hosts = rank_hosts([agg(1, "Hall C", excused=4)])

    assert hosts[0].attendance_rate == 0.0

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Iterable

from ..attendance.model import is_session_not_held
from .model import DateAggregate, HostRanking


@dataclass
class _HostTally:
    dates: list[date] = field(default_factory=list)
    present: int = 0
    late: int = 0
    absent: int = 0
    excused: int = 0

    def add(self, agg: DateAggregate) -> None:
        self.dates.append(agg.date)
        self.present += agg.present_count
        self.late += agg.late_count
        self.absent += agg.unexcused_absent_count
        self.excused += agg.excused_count

    @property
    def attendance_rate(self) -> float:
        attended = self.present + self.late
        accountable = attended + self.absent
        return round(attended / accountable * 100, 1) if accountable > 0 else 0.0


def rank_hosts(date_aggregates: Iterable[DateAggregate]) -> list[HostRanking]:
    """Fold held dates by host location; most frequent host first."""

    tallies: dict[str, _HostTally] = {}
    for agg in date_aggregates:
        host = agg.host_location
        if not host or not agg.session_held or is_session_not_held(host):
            continue
        tallies.setdefault(host, _HostTally()).add(agg)

    ordered = sorted(tallies.items(), key=lambda kv: (-len(kv[1].dates), kv[0]))
    return [
        HostRanking(
            rank=i,
            host_location=host,
            times_hosted=len(t.dates),
            dates=sorted(t.dates),
            present=t.present,
            late=t.late,
            absent=t.absent,
            excused=t.excused,
            attendance_rate=t.attendance_rate,
        )
        for i, (host, t) in enumerate(ordered, start=1)
    ]

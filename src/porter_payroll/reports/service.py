from __future__ import annotations

from collections import Counter, defaultdict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..activity.service import ActivityLogger
from ..attendance.model import AttendanceEntry
from ..attendance.repository import AttendanceRepository, PeriodStats
from ..common.datetime_utils import month_bounds, month_label, month_name, now_local
from ..core.constants import DASHBOARD_RECENT_ENTRIES, TOP_LOCATIONS_LIMIT
from ..core.enums import ActivityType
from ..core.refs import LocationRef
from ..payroll.model import PorterPayroll, payroll_row_to_dict, trip_to_dict
from ..payroll.service import PayrollService
from ..porters.repository import PorterRepository
from .nominal_roll import NominalRollRow, build_nominal_roll, nominal_roll_filename


@dataclass(frozen=True)
class CarrierStat:
    carrier_id: int
    carrier_name: str
    count: int
    total_cost: float


@dataclass(frozen=True)
class LocationStat:
    location: LocationRef
    count: int


@dataclass(frozen=True)
class MonthlyReport:
    month: str
    month_name: str
    generated_at: datetime
    porters: Sequence[PorterPayroll]
    carriers: Sequence[CarrierStat]
    top_from_locations: Sequence[LocationStat]
    top_to_locations: Sequence[LocationStat]

    @property
    def total_payroll(self) -> float:
        return float(sum(p.total_salary for p in self.porters))

    @property
    def total_trips(self) -> int:
        return sum(p.total_trips for p in self.porters)


@dataclass(frozen=True)
class DashboardStats:
    month: str
    current: PeriodStats
    total_porters: int
    recent_entries: Sequence[AttendanceEntry]


@dataclass(frozen=True)
class Spreadsheet:
    filename: str
    content: bytes


class ReportService:
    def __init__(
        self,
        entries: AttendanceRepository,
        porters: PorterRepository,
        payroll: PayrollService,
        activity: ActivityLogger,
    ):
        self._entries = entries
        self._porters = porters
        self._payroll = payroll
        self._activity = activity

    def monthly_report(self, year: int, month: int, *, user_id: Optional[int] = None) -> MonthlyReport:
        entries = self._entries.list_between(*month_bounds(year, month))
        report = MonthlyReport(
            month=month_label(year, month),
            month_name=month_name(year, month),
            generated_at=now_local(),
            porters=self._payroll.group_by_porter(entries),
            carriers=_carrier_stats(entries),
            top_from_locations=_top_locations(e.location_from for e in entries),
            top_to_locations=_top_locations(e.location_to for e in entries),
        )
        self._activity.log(
            ActivityType.REPORT_GENERATED,
            f"Monthly report generated for {report.month_name}",
            user_id,
            {"month": report.month, "totalTrips": report.total_trips},
        )
        return report

    def dashboard(self, today: Optional[date] = None) -> DashboardStats:
        today = today or now_local().date()
        return DashboardStats(
            month=month_label(today.year, today.month),
            current=self._entries.period_stats(*month_bounds(today.year, today.month)),
            total_porters=self._entries.distinct_porter_count(),
            recent_entries=self._entries.recent(DASHBOARD_RECENT_ENTRIES),
        )

    def nominal_roll_rows(self, year: int, month: int) -> list[NominalRollRow]:
        calc = self._payroll.calculator
        rows: list[NominalRollRow] = []
        for r in self._payroll.monthly(year, month).rows:
            porter = self._porters.get_by_id(r.porter.porter_id)
            rows.append(
                NominalRollRow(
                    account_no=(porter.account_no if porter else "") or r.porter.uid,
                    name=r.porter.name,
                    father_name=porter.father_name if porter else "",
                    days_worked=r.total_trips,
                    per_day_rate=calc.per_day_rate(r.total_salary, r.total_trips),
                    total_amount=r.total_salary,
                )
            )
        return rows

    def nominal_roll(self, year: int, month: int) -> Spreadsheet:
        label = month_label(year, month)
        return Spreadsheet(
            filename=nominal_roll_filename(label),
            content=build_nominal_roll(self.nominal_roll_rows(year, month), label),
        )


def _carrier_stats(entries: Sequence[AttendanceEntry]) -> list[CarrierStat]:
    counts: Counter[int] = Counter()
    totals: dict[int, float] = defaultdict(float)
    names: dict[int, str] = {}
    for e in entries:
        counts[e.carrier.carrier_id] += 1
        totals[e.carrier.carrier_id] += e.computed_cost
        names[e.carrier.carrier_id] = e.carrier.name
    stats = [CarrierStat(cid, names[cid], counts[cid], totals[cid]) for cid in counts]
    stats.sort(key=lambda s: s.carrier_name)
    return stats


def _top_locations(locations) -> list[LocationStat]:
    refs: dict[int, LocationRef] = {}
    counts: Counter[int] = Counter()
    for loc in locations:
        refs[loc.location_id] = loc
        counts[loc.location_id] += 1
    return [LocationStat(refs[lid], n) for lid, n in counts.most_common(TOP_LOCATIONS_LIMIT)]


def monthly_report_to_dict(report: MonthlyReport) -> dict:
    return {
        "summary": {
            "month": report.month,
            "monthName": report.month_name,
            "totalPorters": len(report.porters),
            "totalPayroll": report.total_payroll,
            "totalTrips": report.total_trips,
            "generatedAt": report.generated_at.isoformat(),
        },
        "porters": [
            {**payroll_row_to_dict(p), "trips": [trip_to_dict(t) for t in p.trips]} for p in report.porters
        ],
        "statistics": {
            "carriers": [
                {"carrierId": c.carrier_id, "carrierName": c.carrier_name, "count": c.count, "totalCost": c.total_cost}
                for c in report.carriers
            ],
            "topFromLocations": [_location_stat_to_dict(s) for s in report.top_from_locations],
            "topToLocations": [_location_stat_to_dict(s) for s in report.top_to_locations],
        },
    }


def _location_stat_to_dict(s: LocationStat) -> dict:
    return {"locationId": s.location.location_id, "locationName": s.location.name, "count": s.count}

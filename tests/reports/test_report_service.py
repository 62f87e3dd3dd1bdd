from __future__ import annotations

from datetime import date

from porter_payroll.attendance.schemas import NewAttendance
from porter_payroll.reports.service import monthly_report_to_dict


def _trip(container, world, day, **overrides):
    params = {
        "work_date": day,
        "porter_id": world["porter"],
        "carrier_id": world["carrier"],
        "location_from_id": world["wh"],
        "location_to_id": world["dc"],
    }
    params.update(overrides)
    return container.attendance_service.create(NewAttendance(**params))


def test_monthly_report(container, repos, world):
    repos.commute_costs.create(
        from_location_id=world["dc"], to_location_id=world["wh"], carrier_id=world["carrier"], cost=30, is_active=True
    )
    _trip(container, world, date(2025, 6, 1))
    _trip(container, world, date(2025, 6, 2))
    _trip(container, world, date(2025, 6, 3), location_from_id=world["dc"], location_to_id=world["wh"])
    _trip(container, world, date(2025, 7, 1))

    body = monthly_report_to_dict(container.report_service.monthly_report(2025, 6))

    assert body["summary"]["monthName"] == "June 2025"
    assert body["summary"]["totalPayroll"] == 130
    assert body["summary"]["totalTrips"] == 3
    assert len(body["porters"][0]["trips"]) == 3
    assert body["statistics"]["carriers"] == [
        {"carrierId": world["carrier"], "carrierName": "porter", "count": 3, "totalCost": 130}
    ]
    assert body["statistics"]["topFromLocations"][0] == {
        "locationId": world["wh"],
        "locationName": "Main Warehouse",
        "count": 2,
    }
    assert repos.activities.types()[-1] == "report_generated"


def test_dashboard(container, world):
    _trip(container, world, date(2025, 6, 1))
    _trip(container, world, date(2025, 6, 20))
    _trip(container, world, date(2025, 5, 31))

    stats = container.report_service.dashboard(today=date(2025, 6, 15))

    assert stats.month == "2025-06"
    assert stats.current.entry_count == 2
    assert stats.current.total_cost == 100
    assert stats.total_porters == 1
    assert stats.recent_entries[0].work_date == date(2025, 5, 31)

from datetime import date

from porter_payroll.attendance.model import AttendanceEntry
from porter_payroll.core.refs import CarrierRef, LocationRef, PorterRef
from porter_payroll.payroll.calculator.standard_calculator import StandardPayrollCalculator


def _entry(cost: float) -> AttendanceEntry:
    return AttendanceEntry(
        attendance_id=1,
        work_date=date(2025, 6, 1),
        porter=PorterRef(1, "P001", "A"),
        carrier=CarrierRef(1, "porter"),
        location_from=LocationRef(1, "WH01", "Warehouse"),
        location_to=LocationRef(2, "DC01", "Depot"),
        computed_cost=cost,
    )


def test_total_salary_sums_snapshots():
    calc = StandardPayrollCalculator()
    assert calc.total_salary([_entry(50), _entry(50), _entry(50)]) == 150


def test_per_day_rate():
    calc = StandardPayrollCalculator()
    assert calc.per_day_rate(150, 3) == 50
    assert calc.per_day_rate(100, 3) == 33
    assert calc.per_day_rate(0, 0) == 0


def test_per_day_rate_rounds_half_to_even():
    calc = StandardPayrollCalculator()
    assert calc.per_day_rate(5, 2) == 2
    assert calc.per_day_rate(7, 2) == 4

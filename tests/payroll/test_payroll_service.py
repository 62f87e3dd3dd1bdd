from __future__ import annotations

from datetime import date, datetime

import pytest

from porter_payroll.attendance.schemas import NewAttendance
from porter_payroll.core.exceptions import NotFoundError, ValidationError
from porter_payroll.payroll.model import monthly_payroll_to_dict, payment_to_dict
from porter_payroll.payroll.schemas import parse_month_range, parse_payment_update


def _trip(container, world, day: date, porter=None):
    return container.attendance_service.create(
        NewAttendance(
            work_date=day,
            porter_id=porter or world["porter"],
            carrier_id=world["carrier"],
            location_from_id=world["wh"],
            location_to_id=world["dc"],
        )
    )


@pytest.fixture
def second_porter(repos):
    return repos.porters.create(
        uid="P002", name="Aadesh", designation="Porter", account_no="", father_name="", is_active=True
    )


def test_monthly_totals_match_rows(container, world, second_porter):
    _trip(container, world, date(2025, 6, 1))
    _trip(container, world, date(2025, 6, 30))
    _trip(container, world, date(2025, 6, 15), porter=second_porter)
    _trip(container, world, date(2025, 7, 1))

    body = monthly_payroll_to_dict(container.payroll_service.monthly(2025, 6))

    assert body["month"] == "2025-06"
    assert sum(r["totalSalary"] for r in body["payroll"]) == body["summary"]["totalPayroll"] == 150
    assert sum(r["totalTrips"] for r in body["payroll"]) == body["summary"]["totalTrips"] == 3
    assert body["summary"]["totalPorters"] == 2


def test_monthly_rows_sorted_by_porter_name(container, world, second_porter):
    _trip(container, world, date(2025, 6, 1))
    _trip(container, world, date(2025, 6, 2), porter=second_porter)

    names = [r.porter.name for r in container.payroll_service.monthly(2025, 6).rows]

    assert names == ["Aadesh", "Ram Bahadur"]


def test_porter_view_defaults_payment(container, world):
    _trip(container, world, date(2025, 6, 1))

    view = container.payroll_service.for_porter(world["porter"], 2025, 6)

    assert view.payroll.total_salary == 50
    assert view.payroll.total_trips == 1
    assert payment_to_dict(view.payment) == {"isPaid": False, "amount": 0, "paidAt": None, "notes": ""}


def test_porter_view_unknown_porter(container):
    with pytest.raises(NotFoundError):
        container.payroll_service.for_porter(42, 2025, 6)


def test_payment_amount_is_cumulative_total(container, repos, world, monkeypatch):
    stamps = iter([datetime(2025, 7, 1, 10, 0), datetime(2025, 7, 2, 11, 0)])
    monkeypatch.setattr("porter_payroll.payroll.service.now_local", lambda: next(stamps))

    first = container.payroll_service.update_payment(world["porter"], parse_payment_update({"month": "2025-06", "amount": 200}))
    second = container.payroll_service.update_payment(world["porter"], parse_payment_update({"month": "2025-06", "amount": 500}))

    assert first.paid_at == datetime(2025, 7, 1, 10, 0)
    assert second.amount == 500
    assert second.is_paid is True
    assert second.paid_at == datetime(2025, 7, 2, 11, 0)
    assert repos.payments.get(world["porter"], 2025, 6).amount == 500


def test_payment_increment_adds_to_stored_total(container, world):
    svc = container.payroll_service
    svc.update_payment(world["porter"], parse_payment_update({"month": "2025-06", "amount": 200}))

    payment = svc.update_payment(world["porter"], parse_payment_update({"month": "2025-06", "increment": 50}))

    assert payment.amount == 250


def test_zero_payment_marks_unpaid(container, repos, world):
    payment = container.payroll_service.update_payment(
        world["porter"], parse_payment_update({"month": "2025-06", "amount": 0, "notes": "reversed"})
    )

    assert payment.is_paid is False
    assert payment.notes == "reversed"
    assert repos.activities.types()[-1] == "payroll_unpaid"


def test_payment_survives_activity_failure(container, repos, world):
    repos.activities.fail = True

    payment = container.payroll_service.update_payment(world["porter"], parse_payment_update({"month": "2025-06", "amount": 10}))

    assert payment.is_paid is True


def test_payment_validation():
    with pytest.raises(ValidationError):
        parse_payment_update({"month": "2025-6", "amount": 5})
    with pytest.raises(ValidationError):
        parse_payment_update({"month": "2025-06", "amount": -1})
    with pytest.raises(ValidationError):
        parse_payment_update({"month": "2025-06", "amount": 5, "increment": 5})


def test_summary_by_month(container, world, second_porter):
    _trip(container, world, date(2025, 5, 31))
    _trip(container, world, date(2025, 6, 1))
    _trip(container, world, date(2025, 6, 2), porter=second_porter)
    _trip(container, world, date(2025, 8, 1))

    summary = container.payroll_service.summary(parse_month_range({"startMonth": "2025-06", "endMonth": "2025-08"}))

    assert [s.month for s in summary] == ["2025-06", "2025-08"]
    assert summary[0].total_cost == 100
    assert summary[0].total_trips == 2
    assert summary[0].unique_porters == 2


def test_summary_requires_both_months():
    with pytest.raises(ValidationError):
        parse_month_range({"startMonth": "2025-06"})

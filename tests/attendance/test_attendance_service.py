from __future__ import annotations

from datetime import date

import pytest

from porter_payroll.attendance.schemas import parse_attendance_changes, parse_new_attendance
from porter_payroll.core.enums import CarrierType
from porter_payroll.core.exceptions import NotFoundError, ValidationError


def _new(world, **overrides):
    payload = {
        "date": "2025-06-01",
        "carrier": world["carrier"],
        "porter": world["porter"],
        "locationFrom": world["wh"],
        "locationTo": world["dc"],
        "task": "Ration delivery",
    }
    payload.update(overrides)
    return parse_new_attendance(payload)


def test_create_snapshots_route_cost(container, world):
    entry = container.attendance_service.create(_new(world), user_id=None)

    assert entry.computed_cost == 50
    assert entry.commute_cost_id == world["route"]
    assert entry.work_date == date(2025, 6, 1)


def test_snapshot_survives_cost_edit(container, world):
    entry = container.attendance_service.create(_new(world))

    container.commute_cost_service.update(world["route"], {"cost": 75.0})

    assert container.commute_cost_service.get(world["route"]).cost == 75
    assert container.attendance_service.get(entry.attendance_id).computed_cost == 50


def test_missing_route_fails_and_persists_nothing(container, repos, world):
    # DC01 -> WH01 is a different directional route with no cost row.
    with pytest.raises(NotFoundError) as exc:
        container.attendance_service.create(_new(world, locationFrom=world["dc"], locationTo=world["wh"]))

    assert "route and carrier" in exc.value.message
    assert repos.attendance.rows == {}
    assert "attendance_created" not in repos.activities.types()


def test_inactive_route_is_not_resolved(container, world):
    container.commute_cost_service.update(world["route"], {"is_active": False})

    with pytest.raises(NotFoundError):
        container.attendance_service.create(_new(world))


def test_unknown_porter_is_not_found(container, world):
    with pytest.raises(NotFoundError):
        container.attendance_service.create(_new(world, porter=999))


def test_create_logs_activity(container, repos, world):
    container.attendance_service.create(_new(world))

    assert repos.activities.types() == ["attendance_created"]
    assert repos.activities.items[0].metadata["cost"] == 50


def test_update_task_only_keeps_snapshot(container, world):
    entry = container.attendance_service.create(_new(world))
    container.commute_cost_service.update(world["route"], {"cost": 80.0})

    updated = container.attendance_service.update(entry.attendance_id, parse_attendance_changes({"task": "Water"}))

    assert updated.task == "Water"
    assert updated.computed_cost == 50


def test_update_route_resnapshots_with_existing_defaults(container, repos, world):
    truck = repos.carriers.create(name=CarrierType.PICKUP_TRUCK, capacity_kg=500, is_active=True)
    truck_route = repos.commute_costs.create(
        from_location_id=world["wh"], to_location_id=world["dc"], carrier_id=truck, cost=300, is_active=True
    )
    entry = container.attendance_service.create(_new(world))

    updated = container.attendance_service.update(entry.attendance_id, parse_attendance_changes({"carrier": truck}))

    assert updated.carrier.carrier_id == truck
    assert updated.location_from.location_id == world["wh"]
    assert updated.location_to.location_id == world["dc"]
    assert updated.commute_cost_id == truck_route
    assert updated.computed_cost == 300


def test_update_to_unpriced_route_fails(container, world):
    entry = container.attendance_service.create(_new(world))

    with pytest.raises(NotFoundError):
        container.attendance_service.update(entry.attendance_id, parse_attendance_changes({"locationFrom": world["dc"]}))

    assert container.attendance_service.get(entry.attendance_id).location_from.location_id == world["wh"]


def test_delete_is_hard(container, repos, world):
    entry = container.attendance_service.create(_new(world))

    container.attendance_service.delete(entry.attendance_id)

    assert repos.attendance.rows == {}
    with pytest.raises(NotFoundError):
        container.attendance_service.get(entry.attendance_id)


def test_date_without_time_keeps_calendar_day(container, world):
    entry = container.attendance_service.create(_new(world, date="2025-03-05"))

    assert container.attendance_service.get(entry.attendance_id).work_date.isoformat() == "2025-03-05"


def test_soft_deleted_porter_keeps_entries_and_payroll(container, world):
    container.attendance_service.create(_new(world))
    before = container.payroll_service.monthly(2025, 6)

    container.porter_service.deactivate(world["porter"])

    after = container.payroll_service.monthly(2025, 6)
    assert container.porter_service.get(world["porter"]).is_active is False
    assert after.total_payroll == before.total_payroll == 50
    assert after.total_trips == 1


def test_calendar_groups_by_day(container, repos, world):
    second = repos.porters.create(
        uid="P002", name="Shyam", designation="", account_no="", father_name="", is_active=True
    )
    container.attendance_service.create(_new(world, date="2025-06-01"))
    container.attendance_service.create(_new(world, date="2025-06-01", porter=second))
    container.attendance_service.create(_new(world, date="2025-06-02"))

    days = {d.day.isoformat(): d for d in container.attendance_service.calendar(2025, 6)}

    assert days["2025-06-01"].count == 2
    assert days["2025-06-01"].porter_count == 2
    assert days["2025-06-01"].total_cost == 100
    assert days["2025-06-02"].count == 1


def test_new_attendance_collects_every_field_error():
    with pytest.raises(ValidationError) as exc:
        parse_new_attendance({"date": "05/03/2025", "carrier": "abc", "porter": -1})

    fields = {e.field for e in exc.value.errors}
    assert fields == {"date", "carrier", "porter", "locationFrom", "locationTo"}

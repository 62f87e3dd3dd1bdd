from __future__ import annotations

import time
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Any, Optional

import pytest
from werkzeug.security import generate_password_hash

from porter_payroll.activity.model import Activity
from porter_payroll.attendance.model import AttendanceEntry, DaySummary
from porter_payroll.attendance.repository import AttendanceFilter, PeriodStats
from porter_payroll.carriers.model import Carrier
from porter_payroll.common.pagination import Page, PageRequest
from porter_payroll.commute_costs.model import CommuteCost
from porter_payroll.commute_costs.repository import CommuteCostFilter
from porter_payroll.container import Container, Repositories, assemble
from porter_payroll.core.enums import CarrierType, Role
from porter_payroll.core.exceptions import ConflictError, NotFoundError
from porter_payroll.core.refs import CarrierRef, LocationRef, PorterRef, UserRef
from porter_payroll.locations.model import Location
from porter_payroll.payroll.model import Payment
from porter_payroll.porters.model import Porter
from porter_payroll.porters.repository import SEARCH_FIELDS, PorterFilter
from porter_payroll.users.model import User
from porter_payroll.users.tokens import TokenService


def _page(items: list, page: PageRequest) -> Page:
    return Page(items=items[page.offset : page.offset + page.limit], total=len(items), page=page.page, limit=page.limit)


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, User] = {}
        self._id = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email.lower()), None)

    def create_user(self, *, name: str, email: str, password_hash: str, role: Role) -> int:
        if self.get_by_email(email):
            raise ConflictError("Email already registered")
        self._id += 1
        self.by_id[self._id] = User(
            user_id=self._id,
            name=name,
            email=email.lower(),
            password_hash=password_hash,
            role=role,
            created_at=datetime(2025, 1, 1, 9, 0),
        )
        return self._id


class InMemoryPorters:
    def __init__(self):
        self.by_id: dict[int, Porter] = {}
        self._id = 0

    def get_by_id(self, porter_id: int) -> Optional[Porter]:
        return self.by_id.get(porter_id)

    def list(self, *, filters: PorterFilter, page: PageRequest) -> Page[Porter]:
        items = list(self.by_id.values())
        if filters.active is not None:
            items = [p for p in items if p.is_active == filters.active]
        if filters.search:
            fields = [filters.field] if filters.field else list(SEARCH_FIELDS)
            needle = filters.search.lower()
            items = [p for p in items if any(needle in getattr(p, f).lower() for f in fields)]
        items.sort(key=lambda p: p.name)
        return _page(items, page)

    def create(self, *, uid, name, designation, account_no, father_name, is_active) -> int:
        if any(p.uid == uid for p in self.by_id.values()):
            raise ConflictError(f"Porter UID {uid} already exists")
        self._id += 1
        self.by_id[self._id] = Porter(self._id, uid, name, designation, account_no, father_name, is_active)
        return self._id

    def update(self, porter_id: int, changes: dict[str, Any]) -> bool:
        if porter_id not in self.by_id:
            return False
        self.by_id[porter_id] = replace(self.by_id[porter_id], **changes)
        return True


class InMemoryLocations:
    def __init__(self):
        self.by_id: dict[int, Location] = {}
        self._id = 0

    def get_by_id(self, location_id: int) -> Optional[Location]:
        return self.by_id.get(location_id)

    def get_by_code(self, code: str) -> Optional[Location]:
        return next((loc for loc in self.by_id.values() if loc.code == code.strip().upper()), None)

    def list(self, *, active=None, search=None):
        items = [loc for loc in self.by_id.values() if active is None or loc.is_active == active]
        if search:
            items = [loc for loc in items if search.lower() in loc.code.lower() or search.lower() in loc.name.lower()]
        return sorted(items, key=lambda loc: loc.code)

    def create(self, *, code: str, name: str, is_active: bool) -> int:
        if self.get_by_code(code):
            raise ConflictError(f"Location code {code} already exists")
        self._id += 1
        self.by_id[self._id] = Location(self._id, code, name, is_active)
        return self._id

    def update(self, location_id: int, changes: dict[str, Any]) -> bool:
        if location_id not in self.by_id:
            return False
        self.by_id[location_id] = replace(self.by_id[location_id], **changes)
        return True


class InMemoryCarriers:
    def __init__(self):
        self.by_id: dict[int, Carrier] = {}
        self._id = 0

    def get_by_id(self, carrier_id: int) -> Optional[Carrier]:
        return self.by_id.get(carrier_id)

    def get_by_name(self, name: CarrierType) -> Optional[Carrier]:
        return next((c for c in self.by_id.values() if c.name == name), None)

    def list(self, *, active=None):
        items = [c for c in self.by_id.values() if active is None or c.is_active == active]
        return sorted(items, key=lambda c: c.name.value)

    def create(self, *, name: CarrierType, capacity_kg: float, is_active: bool) -> int:
        if self.get_by_name(name):
            raise ConflictError(f"Carrier {name.value} already exists")
        self._id += 1
        self.by_id[self._id] = Carrier(self._id, name, capacity_kg, is_active)
        return self._id

    def update(self, carrier_id: int, changes: dict[str, Any]) -> bool:
        if carrier_id not in self.by_id:
            return False
        self.by_id[carrier_id] = replace(self.by_id[carrier_id], **changes)
        return True


class InMemoryCommuteCosts:
    """Rows hold ids only; references are resolved on read like the SQL join."""

    def __init__(self, locations: InMemoryLocations, carriers: InMemoryCarriers):
        self._locations = locations
        self._carriers = carriers
        self.rows: dict[int, dict] = {}
        self._id = 0

    def _view(self, row: dict) -> CommuteCost:
        fl = self._locations.get_by_id(row["from_location_id"])
        tl = self._locations.get_by_id(row["to_location_id"])
        c = self._carriers.get_by_id(row["carrier_id"])
        return CommuteCost(
            commute_cost_id=row["commute_cost_id"],
            from_location=LocationRef(fl.location_id, fl.code, fl.name),
            to_location=LocationRef(tl.location_id, tl.code, tl.name),
            carrier=CarrierRef(c.carrier_id, c.name.value, c.capacity_kg),
            cost=row["cost"],
            is_active=row["is_active"],
        )

    def _check(self, row: dict, *, exclude: Optional[int] = None) -> None:
        if (
            not self._locations.get_by_id(row["from_location_id"])
            or not self._locations.get_by_id(row["to_location_id"])
            or not self._carriers.get_by_id(row["carrier_id"])
        ):
            raise NotFoundError("Location or carrier not found")
        key = (row["from_location_id"], row["to_location_id"], row["carrier_id"])
        for other in self.rows.values():
            if other["commute_cost_id"] == exclude:
                continue
            if (other["from_location_id"], other["to_location_id"], other["carrier_id"]) == key:
                raise ConflictError("Commute cost already exists for this route and carrier")

    def get_by_id(self, commute_cost_id: int) -> Optional[CommuteCost]:
        row = self.rows.get(commute_cost_id)
        return self._view(row) if row else None

    def find_active(self, *, carrier_id: int, from_location_id: int, to_location_id: int) -> Optional[CommuteCost]:
        for row in self.rows.values():
            if (
                row["is_active"]
                and row["carrier_id"] == carrier_id
                and row["from_location_id"] == from_location_id
                and row["to_location_id"] == to_location_id
            ):
                return self._view(row)
        return None

    def list(self, *, filters: CommuteCostFilter, page: PageRequest) -> Page[CommuteCost]:
        items = [
            self._view(r)
            for r in self.rows.values()
            if (not filters.from_location_id or r["from_location_id"] == filters.from_location_id)
            and (not filters.to_location_id or r["to_location_id"] == filters.to_location_id)
            and (not filters.carrier_id or r["carrier_id"] == filters.carrier_id)
        ]
        items.sort(key=lambda cc: (cc.from_location.code, cc.to_location.code, cc.carrier.name))
        return _page(items, page)

    def create(self, *, from_location_id, to_location_id, carrier_id, cost, is_active) -> int:
        row = {
            "from_location_id": from_location_id,
            "to_location_id": to_location_id,
            "carrier_id": carrier_id,
            "cost": float(cost),
            "is_active": is_active,
        }
        self._check(row)
        self._id += 1
        row["commute_cost_id"] = self._id
        self.rows[self._id] = row
        return self._id

    def update(self, commute_cost_id: int, changes: dict[str, Any]) -> bool:
        if commute_cost_id not in self.rows:
            return False
        row = {**self.rows[commute_cost_id], **changes}
        self._check(row, exclude=commute_cost_id)
        self.rows[commute_cost_id] = row
        return True

    def upsert(self, *, from_location_id, to_location_id, carrier_id, cost) -> int:
        for row in self.rows.values():
            if (row["from_location_id"], row["to_location_id"], row["carrier_id"]) == (
                from_location_id,
                to_location_id,
                carrier_id,
            ):
                row["cost"] = float(cost)
                return row["commute_cost_id"]
        return self.create(
            from_location_id=from_location_id,
            to_location_id=to_location_id,
            carrier_id=carrier_id,
            cost=cost,
            is_active=True,
        )

    def delete(self, commute_cost_id: int) -> bool:
        return self.rows.pop(commute_cost_id, None) is not None


class InMemoryAttendance:
    def __init__(self, porters, carriers, locations, users):
        self._porters = porters
        self._carriers = carriers
        self._locations = locations
        self._users = users
        self.rows: dict[int, dict] = {}
        self._id = 0
        self._clock = datetime(2025, 1, 1, 8, 0)

    def _view(self, row: dict) -> AttendanceEntry:
        p = self._porters.get_by_id(row["porter_id"])
        c = self._carriers.get_by_id(row["carrier_id"])
        fl = self._locations.get_by_id(row["location_from_id"])
        tl = self._locations.get_by_id(row["location_to_id"])
        u = self._users.get_by_id(row["created_by"]) if row.get("created_by") else None
        return AttendanceEntry(
            attendance_id=row["attendance_id"],
            work_date=row["work_date"],
            porter=PorterRef(p.porter_id, p.uid, p.name, p.designation),
            carrier=CarrierRef(c.carrier_id, c.name.value, c.capacity_kg),
            location_from=LocationRef(fl.location_id, fl.code, fl.name),
            location_to=LocationRef(tl.location_id, tl.code, tl.name),
            computed_cost=row["computed_cost"],
            task=row["task"],
            commute_cost_id=row["commute_cost_id"],
            created_by=UserRef(u.user_id, u.name, u.email) if u else None,
            created_at=row["created_at"],
        )

    def _matching(self, filters: AttendanceFilter) -> list[dict]:
        return [
            r
            for r in self.rows.values()
            if (filters.start is None or r["work_date"] >= filters.start)
            and (filters.end is None or r["work_date"] <= filters.end)
            and (not filters.porter_id or r["porter_id"] == filters.porter_id)
        ]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceEntry]:
        row = self.rows.get(attendance_id)
        return self._view(row) if row else None

    def list(self, *, filters: AttendanceFilter, page: PageRequest) -> Page[AttendanceEntry]:
        rows = sorted(self._matching(filters), key=lambda r: (r["work_date"], r["attendance_id"]), reverse=True)
        return _page([self._view(r) for r in rows], page)

    def list_between(self, start: date, end: date, *, porter_id: Optional[int] = None):
        rows = self._matching(AttendanceFilter(start=start, end=end, porter_id=porter_id))
        rows.sort(key=lambda r: (r["work_date"], r["attendance_id"]))
        return [self._view(r) for r in rows]

    def create(self, **fields) -> int:
        self._id += 1
        self._clock += timedelta(minutes=1)
        self.rows[self._id] = {**fields, "attendance_id": self._id, "created_at": self._clock}
        return self._id

    def update(self, attendance_id: int, changes: dict[str, Any]) -> bool:
        if attendance_id not in self.rows:
            return False
        self.rows[attendance_id].update(changes)
        return True

    def delete(self, attendance_id: int) -> bool:
        return self.rows.pop(attendance_id, None) is not None

    def daily_summary(self, start: date, end: date):
        by_day: dict[date, list[dict]] = {}
        for r in self._matching(AttendanceFilter(start=start, end=end)):
            by_day.setdefault(r["work_date"], []).append(r)
        return [
            DaySummary(
                day=d,
                count=len(rows),
                porter_count=len({r["porter_id"] for r in rows}),
                total_cost=float(sum(r["computed_cost"] for r in rows)),
            )
            for d, rows in sorted(by_day.items())
        ]

    def period_stats(self, start: date, end: date) -> PeriodStats:
        rows = self._matching(AttendanceFilter(start=start, end=end))
        return PeriodStats(
            entry_count=len(rows),
            total_cost=float(sum(r["computed_cost"] for r in rows)),
            porter_count=len({r["porter_id"] for r in rows}),
        )

    def distinct_porter_count(self) -> int:
        return len({r["porter_id"] for r in self.rows.values()})

    def recent(self, limit: int):
        rows = sorted(self.rows.values(), key=lambda r: r["created_at"], reverse=True)[:limit]
        return [self._view(r) for r in rows]


class InMemoryPayments:
    def __init__(self):
        self.rows: dict[tuple[int, int, int], Payment] = {}

    def get(self, porter_id: int, year: int, month: int) -> Optional[Payment]:
        return self.rows.get((porter_id, year, month))

    def _store(self, porter_id, year, month, amount, notes, paid_at, updated_by) -> Payment:
        payment = Payment(porter_id, year, month, float(amount), amount > 0, paid_at, notes, updated_by)
        self.rows[(porter_id, year, month)] = payment
        return payment

    def set_amount(self, *, porter_id, year, month, amount, notes, paid_at, updated_by) -> Payment:
        return self._store(porter_id, year, month, amount, notes, paid_at, updated_by)

    def add_amount(self, *, porter_id, year, month, increment, notes, paid_at, updated_by) -> Payment:
        current = self.rows.get((porter_id, year, month))
        total = (current.amount if current else 0.0) + increment
        return self._store(porter_id, year, month, total, notes, paid_at, updated_by)


class InMemoryActivities:
    def __init__(self):
        self.items: list[Activity] = []
        self.fail = False

    def append(self, *, activity_type, description, user_id, metadata) -> int:
        if self.fail:
            raise RuntimeError("activity store down")
        activity = Activity(
            activity_id=len(self.items) + 1,
            activity_type=activity_type,
            description=description,
            user_id=user_id,
            created_at=datetime(2025, 1, 1, 12, 0) + timedelta(seconds=len(self.items)),
            metadata=metadata,
        )
        self.items.append(activity)
        return activity.activity_id

    def list_recent(self, *, limit: int):
        return list(reversed(self.items))[:limit]

    def types(self) -> list[str]:
        return [a.activity_type.value for a in self.items]


class FakePdfRenderer:
    def __init__(self, content: bytes = b"%PDF-1.4 fake"):
        self.content = content
        self.rendered: list[str] = []

    def render(self, html: str) -> bytes:
        self.rendered.append(html)
        return self.content


@pytest.fixture
def repos() -> Repositories:
    users = InMemoryUsers()
    porters = InMemoryPorters()
    locations = InMemoryLocations()
    carriers = InMemoryCarriers()
    return Repositories(
        users=users,
        porters=porters,
        locations=locations,
        carriers=carriers,
        commute_costs=InMemoryCommuteCosts(locations, carriers),
        attendance=InMemoryAttendance(porters, carriers, locations, users),
        payments=InMemoryPayments(),
        activities=InMemoryActivities(),
    )


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(access_secret="test-access", refresh_secret="test-refresh")


@pytest.fixture
def pdf_renderer() -> FakePdfRenderer:
    return FakePdfRenderer()


@pytest.fixture
def container(repos, tokens, pdf_renderer) -> Container:
    return assemble(repos, tokens=tokens, pdf_renderer=pdf_renderer, allow_role_on_register=True)


@pytest.fixture
def world(repos):
    """WH01/DC01, the porter carrier, porter P001 and a WH01 -> DC01 route at 50."""
    wh = repos.locations.create(code="WH01", name="Main Warehouse", is_active=True)
    dc = repos.locations.create(code="DC01", name="Distribution Center", is_active=True)
    carrier = repos.carriers.create(name=CarrierType.PORTER, capacity_kg=20, is_active=True)
    porter = repos.porters.create(
        uid="P001",
        name="Ram Bahadur",
        designation="Senior Porter",
        account_no="ACC-001",
        father_name="Hari Bahadur",
        is_active=True,
    )
    route = repos.commute_costs.create(
        from_location_id=wh, to_location_id=dc, carrier_id=carrier, cost=50, is_active=True
    )
    return {"wh": wh, "dc": dc, "carrier": carrier, "porter": porter, "route": route}


@pytest.fixture
def users(repos) -> dict[str, int]:
    return {
        role.value: repos.users.create_user(
            name=f"{role.value} User",
            email=f"{role.value.lower()}@example.com",
            password_hash=generate_password_hash("secret123"),
            role=role,
        )
        for role in Role
    }


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from porter_payroll.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(users, tokens):
    def _headers(role: str = "Admin") -> dict[str, str]:
        return {"Authorization": f"Bearer {tokens.issue_pair(users[role]).access_token}"}

    return _headers


@pytest.fixture
def local_tz(monkeypatch):
    """Switch the process timezone for one test; restored afterwards."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available")

    def _set(name: str) -> None:
        monkeypatch.setenv("TZ", name)
        time.tzset()

    yield _set
    monkeypatch.undo()
    time.tzset()

from __future__ import annotations

import pytest

from porter_payroll.common.pagination import PageRequest
from porter_payroll.core.exceptions import ConflictError, NotFoundError, ValidationError
from porter_payroll.porters.schemas import parse_new_porter, parse_porter_changes, parse_porter_filter


def test_create_and_duplicate_uid(container, repos):
    porter = container.porter_service.create(parse_new_porter({"uid": "P010", "name": "Maya", "accountNo": "ACC-9"}))

    assert porter.account_no == "ACC-9"
    assert porter.is_active
    assert repos.activities.types() == ["porter_created"]
    with pytest.raises(ConflictError):
        container.porter_service.create(parse_new_porter({"uid": "P010", "name": "Other"}))


def test_search_by_field(container, world):
    container.porter_service.create(parse_new_porter({"uid": "P020", "name": "Bishnu", "designation": "Helper"}))

    page = container.porter_service.list(
        filters=parse_porter_filter({"search": "help", "field": "designation"}), page=PageRequest(1, 10)
    )

    assert [p.uid for p in page.items] == ["P020"]


def test_unknown_search_field_searches_all(container, world):
    page = container.porter_service.list(
        filters=parse_porter_filter({"search": "p001", "field": "password"}), page=PageRequest(1, 10)
    )

    assert page.total == 1


def test_deactivate_is_soft(container, repos, world):
    container.porter_service.deactivate(world["porter"])

    assert repos.porters.get_by_id(world["porter"]).is_active is False
    inactive = container.porter_service.list(filters=parse_porter_filter({"active": "false"}), page=PageRequest(1, 10))
    assert inactive.total == 1


def test_update_unknown_porter(container):
    with pytest.raises(NotFoundError):
        container.porter_service.update(99, parse_porter_changes({"name": "Nobody"}))


def test_name_too_short():
    with pytest.raises(ValidationError):
        parse_new_porter({"uid": "P1", "name": "X"})

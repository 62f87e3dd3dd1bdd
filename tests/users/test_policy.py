import pytest

from porter_payroll.core.enums import Action, Role
from porter_payroll.core.exceptions import AuthorizationError
from porter_payroll.users.policy import POLICY, authorize, is_allowed


def test_every_action_has_a_rule():
    assert set(POLICY) == set(Action)


def test_admin_can_do_everything():
    assert all(is_allowed(Role.ADMIN, action) for action in Action)


@pytest.mark.parametrize(
    "action",
    [Action.DELETE_PORTER, Action.DELETE_LOCATION, Action.DELETE_COMMUTE_COST, Action.DELETE_ATTENDANCE, Action.MANAGE_CARRIERS],
)
def test_supervisor_cannot_delete_or_manage_carriers(action):
    assert not is_allowed(Role.SUPERVISOR, action)


def test_supervisor_records_attendance_and_payments():
    assert is_allowed(Role.SUPERVISOR, Action.RECORD_ATTENDANCE)
    assert is_allowed(Role.SUPERVISOR, Action.UPDATE_PAYMENT)


def test_viewer_reads_only():
    assert is_allowed(Role.VIEWER, Action.READ)
    assert is_allowed(Role.VIEWER, Action.GENERATE_DOCUMENT)
    with pytest.raises(AuthorizationError):
        authorize(Role.VIEWER, Action.MANAGE_PORTERS)

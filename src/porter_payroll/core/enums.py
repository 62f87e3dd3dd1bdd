from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for route authorization."""

    ADMIN = "Admin"
    SUPERVISOR = "Supervisor"
    VIEWER = "Viewer"


class CarrierType(str, Enum):
    """Transport modes a trip can be recorded with."""

    PORTER = "porter"
    SMALL_DONKEY = "small-donkey"
    PICKUP_TRUCK = "pickup-truck"


class ActivityType(str, Enum):
    ATTENDANCE_CREATED = "attendance_created"
    ATTENDANCE_UPDATED = "attendance_updated"
    ATTENDANCE_DELETED = "attendance_deleted"
    PORTER_CREATED = "porter_created"
    PORTER_UPDATED = "porter_updated"
    PORTER_DELETED = "porter_deleted"
    LOCATION_CREATED = "location_created"
    LOCATION_UPDATED = "location_updated"
    LOCATION_DELETED = "location_deleted"
    CARRIER_CREATED = "carrier_created"
    CARRIER_UPDATED = "carrier_updated"
    CARRIER_DELETED = "carrier_deleted"
    COMMUTE_COST_CREATED = "commute_cost_created"
    COMMUTE_COST_UPDATED = "commute_cost_updated"
    COMMUTE_COST_DELETED = "commute_cost_deleted"
    USER_LOGIN = "user_login"
    REPORT_GENERATED = "report_generated"
    PAYROLL_PAID = "payroll_paid"
    PAYROLL_UNPAID = "payroll_unpaid"


class Action(str, Enum):
    """Operations checked by the authorization policy."""

    READ = "read"
    MANAGE_PORTERS = "manage_porters"
    DELETE_PORTER = "delete_porter"
    MANAGE_LOCATIONS = "manage_locations"
    DELETE_LOCATION = "delete_location"
    MANAGE_CARRIERS = "manage_carriers"
    MANAGE_COMMUTE_COSTS = "manage_commute_costs"
    DELETE_COMMUTE_COST = "delete_commute_cost"
    RECORD_ATTENDANCE = "record_attendance"
    DELETE_ATTENDANCE = "delete_attendance"
    UPDATE_PAYMENT = "update_payment"
    GENERATE_DOCUMENT = "generate_document"

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path
from types import ModuleType
from typing import Callable, Optional

from .activity.mysql_activity_repository import MySQLActivityRepository
from .activity.repository import ActivityRepository
from .activity.service import ActivityLogger
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .carriers.mysql_carrier_repository import MySQLCarrierRepository
from .carriers.repository import CarrierRepository
from .carriers.service import CarrierService
from .commute_costs.mysql_commute_cost_repository import MySQLCommuteCostRepository
from .commute_costs.repository import CommuteCostRepository
from .commute_costs.service import CommuteCostService
from .database.connection import DBConfig, DatabaseConnection
from .documents.renderer import PdfRenderer, PlaywrightPdfRenderer
from .documents.service import DEFAULT_TEMPLATE_PATH, DocumentService
from .locations.mysql_location_repository import MySQLLocationRepository
from .locations.repository import LocationRepository
from .locations.service import LocationService
from .payroll.mysql_payment_repository import MySQLPaymentRepository
from .payroll.repository import PaymentRepository
from .payroll.service import PayrollService
from .porters.mysql_porter_repository import MySQLPorterRepository
from .porters.repository import PorterRepository
from .porters.service import PorterService
from .reports.service import ReportService
from .users.guard import make_guard
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService
from .users.tokens import TokenService


@dataclass(frozen=True)
class Repositories:
    users: UserRepository
    porters: PorterRepository
    locations: LocationRepository
    carriers: CarrierRepository
    commute_costs: CommuteCostRepository
    attendance: AttendanceRepository
    payments: PaymentRepository
    activities: ActivityRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    repos: Repositories
    pdf_renderer: PdfRenderer

    activity_logger: ActivityLogger
    auth_service: AuthService
    porter_service: PorterService
    location_service: LocationService
    carrier_service: CarrierService
    commute_cost_service: CommuteCostService
    attendance_service: AttendanceService
    payroll_service: PayrollService
    report_service: ReportService
    document_service: DocumentService

    @property
    def require(self) -> Callable:
        return make_guard(self.auth_service)

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def assemble(
    repos: Repositories,
    *,
    tokens: TokenService,
    pdf_renderer: PdfRenderer,
    conn: Optional[DatabaseConnection] = None,
    allow_role_on_register: bool = False,
    template_path: Path = DEFAULT_TEMPLATE_PATH,
) -> Container:
    """Wire services over any set of repositories (MySQL or in-memory)."""
    activity = ActivityLogger(repos.activities)
    commute_cost_service = CommuteCostService(repos.commute_costs, repos.locations, repos.carriers, activity)
    payroll_service = PayrollService(repos.attendance, repos.porters, repos.payments, activity)

    return Container(
        conn=conn,
        repos=repos,
        pdf_renderer=pdf_renderer,
        activity_logger=activity,
        auth_service=AuthService(
            repos.users, tokens, activity, allow_role_on_register=allow_role_on_register
        ),
        porter_service=PorterService(repos.porters, activity),
        location_service=LocationService(repos.locations, activity),
        carrier_service=CarrierService(repos.carriers, activity),
        commute_cost_service=commute_cost_service,
        attendance_service=AttendanceService(repos.attendance, repos.porters, commute_cost_service, activity),
        payroll_service=payroll_service,
        report_service=ReportService(repos.attendance, repos.porters, payroll_service, activity),
        document_service=DocumentService(pdf_renderer, template_path=template_path),
    )


def build_container(settings: ModuleType) -> Container:
    config = DBConfig.from_dict(settings.DB_CONFIG, pool_size=getattr(settings, "DB_POOL_SIZE", 5))
    conn = DatabaseConnection(config)
    conn.open()

    repos = Repositories(
        users=MySQLUserRepository(conn),
        porters=MySQLPorterRepository(conn),
        locations=MySQLLocationRepository(conn),
        carriers=MySQLCarrierRepository(conn),
        commute_costs=MySQLCommuteCostRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        payments=MySQLPaymentRepository(conn),
        activities=MySQLActivityRepository(conn),
    )
    tokens = TokenService(
        access_secret=settings.JWT_ACCESS_SECRET,
        refresh_secret=settings.JWT_REFRESH_SECRET,
        access_ttl=timedelta(minutes=int(getattr(settings, "JWT_ACCESS_EXPIRES_MINUTES", 15))),
        refresh_ttl=timedelta(days=int(getattr(settings, "JWT_REFRESH_EXPIRES_DAYS", 7))),
    )
    template_path = getattr(settings, "PDF_TEMPLATE_PATH", "") or DEFAULT_TEMPLATE_PATH

    return assemble(
        repos,
        tokens=tokens,
        pdf_renderer=PlaywrightPdfRenderer(browser_args=getattr(settings, "PDF_BROWSER_ARGS", ())),
        conn=conn,
        allow_role_on_register=bool(getattr(settings, "ALLOW_ROLE_ON_REGISTER", False)),
        template_path=Path(template_path),
    )

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .biometric.mysql_biometric_repository import MySQLBiometricCredentialRepository
from .biometric.repository import BiometricCredentialRepository
from .biometric.service import BiometricService
from .companies.mysql_company_repository import MySQLCompanyRepository
from .companies.mysql_department_repository import MySQLDepartmentRepository
from .companies.repository import CompanyRepository, DepartmentRepository
from .companies.service import CompanyService
from .core.constants import DEFAULT_WEBAUTHN_TIMEOUT_MS
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository, MySQLLeaveTypeRepository
from .events.repository import EventRepository, LeaveTypeRepository
from .events.service import EventService
from .ledger.mysql_transaction_repository import MySQLTransactionRepository
from .ledger.repository import TransactionRepository
from .ledger.service import LedgerService, TransactionMaintenanceService
from .leave.service import LeaveService
from .public_holidays.service import HolidayCalendar
from .users.mysql_profile_repository import MySQLProfileRepository
from .users.repository import ProfileRepository
from .users.service import AuthService, ProfileService
from .worktime.service import WorkReportService, WorkSummaryService


@dataclass(frozen=True)
class Repositories:
    profiles: ProfileRepository
    companies: CompanyRepository
    departments: DepartmentRepository
    events: EventRepository
    leave_types: LeaveTypeRepository
    attendance: AttendanceRepository
    transactions: TransactionRepository
    biometric_credentials: BiometricCredentialRepository


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]
    repos: Repositories
    holiday_calendar: HolidayCalendar

    auth_service: AuthService
    profile_service: ProfileService
    company_service: CompanyService
    event_service: EventService
    attendance_service: AttendanceService
    work_summary_service: WorkSummaryService
    work_report_service: WorkReportService
    leave_service: LeaveService
    ledger_service: LedgerService
    transaction_maintenance_service: TransactionMaintenanceService
    biometric_service: BiometricService


def mysql_repositories(conn: DatabaseConnection) -> Repositories:
    return Repositories(
        profiles=MySQLProfileRepository(conn),
        companies=MySQLCompanyRepository(conn),
        departments=MySQLDepartmentRepository(conn),
        events=MySQLEventRepository(conn),
        leave_types=MySQLLeaveTypeRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
        transactions=MySQLTransactionRepository(conn),
        biometric_credentials=MySQLBiometricCredentialRepository(conn),
    )


def assemble_container(
    repos: Repositories,
    *,
    conn: Optional[DatabaseConnection] = None,
    rp_id: str = "localhost",
    rp_name: str = "그룹웨어",
    webauthn_timeout_ms: int = DEFAULT_WEBAUTHN_TIMEOUT_MS,
    holiday_country: str = "KR",
    holiday_calendar: Optional[HolidayCalendar] = None,
    biometric_random_bytes: Any = None,
) -> Container:
    calendar = holiday_calendar or HolidayCalendar(holiday_country)

    return Container(
        conn=conn,
        repos=repos,
        holiday_calendar=calendar,
        auth_service=AuthService(repos.profiles, repos.companies),
        profile_service=ProfileService(repos.profiles),
        company_service=CompanyService(repos.companies, repos.profiles, repos.departments),
        event_service=EventService(repos.events, repos.leave_types, repos.profiles, holiday_calendar=calendar),
        attendance_service=AttendanceService(repos.attendance, repos.events, repos.profiles),
        work_summary_service=WorkSummaryService(repos.profiles, repos.events, holiday_calendar=calendar),
        work_report_service=WorkReportService(repos.events),
        leave_service=LeaveService(repos.profiles, repos.events, repos.leave_types, holiday_calendar=calendar),
        ledger_service=LedgerService(repos.transactions),
        transaction_maintenance_service=TransactionMaintenanceService(repos.transactions),
        biometric_service=BiometricService(
            repos.biometric_credentials,
            repos.profiles,
            rp_id=rp_id,
            rp_name=rp_name,
            timeout_ms=webauthn_timeout_ms,
            random_bytes=biometric_random_bytes,
        ),
    )


def build_container(*, db_config: dict, **options: Any) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return assemble_container(mysql_repositories(conn), conn=conn, **options)

"""
Model registry for the hrms app.

Django discovers an app's models through this module, so every model package
is imported here.
"""

from .audit.models import AuditLogEntry
from .hr.models import (
    Asset,
    AssetCategory,
    Attendance,
    Department,
    Designation,
    Employee,
    ExpenseCategory,
    ExpenseClaim,
    Goal,
    JobApplication,
    JobPosting,
    LeaveRequest,
    LeaveType,
    Location,
    Payslip,
    PerformanceReview,
    ReviewCycle,
    TrainingProgram,
)
from .multitenancy.models import Tenant
from .reporting.models import GeneratedReport, ReportTemplate

__all__ = [
    "AuditLogEntry",
    "Tenant",
    "Department",
    "Designation",
    "Location",
    "Employee",
    "Attendance",
    "LeaveType",
    "LeaveRequest",
    "Payslip",
    "Goal",
    "ReviewCycle",
    "PerformanceReview",
    "TrainingProgram",
    "ExpenseCategory",
    "ExpenseClaim",
    "AssetCategory",
    "Asset",
    "JobPosting",
    "JobApplication",
    "ReportTemplate",
    "GeneratedReport",
]

"""
Field registry and operator catalog for the report builder.

Pure lookup tables, never mutated at runtime. Every field id a report may
reference (selection, filter, sort or aggregation) must be listed here; this
is what keeps arbitrary paths out of the query compiler.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from ..hr import choices
from .types import (
    DataSource,
    FieldDescriptor,
    FieldType,
    InvalidField,
    UnknownDataSource,
)

T = FieldType

OPERATORS_BY_TYPE: dict[FieldType, tuple[str, ...]] = {
    T.TEXT: ("equals", "contains", "startsWith", "endsWith", "isEmpty", "isNotEmpty"),
    T.NUMBER: ("equals", "gt", "gte", "lt", "lte", "between"),
    T.DATE: ("equals", "gt", "gte", "lt", "lte", "between"),
    T.CURRENCY: ("equals", "gt", "gte", "lt", "lte", "between"),
    T.PERCENTAGE: ("equals", "gt", "gte", "lt", "lte", "between"),
    T.BOOLEAN: ("equals",),
    T.ENUM: ("equals", "in", "notIn"),
}


def _field(
    field_id: str,
    display_name: str,
    field_type: FieldType,
    category: str,
    options: Optional[Iterable[str]] = None,
) -> FieldDescriptor:
    return FieldDescriptor(
        id=field_id,
        display_name=display_name,
        type=field_type,
        category=category,
        options=tuple(options or ()),
    )


def _person_fields(prefix: str, category: str) -> list[FieldDescriptor]:
    return [
        _field(f"{prefix}.firstName", "First Name", T.TEXT, category),
        _field(f"{prefix}.lastName", "Last Name", T.TEXT, category),
        _field(f"{prefix}.employeeCode", "Employee Code", T.TEXT, category),
        _field(f"{prefix}.department.name", "Department", T.TEXT, category),
    ]


FIELD_REGISTRY: dict[DataSource, tuple[FieldDescriptor, ...]] = {
    DataSource.EMPLOYEES: (
        _field("id", "Employee ID", T.NUMBER, "Basic"),
        _field("employeeCode", "Employee Code", T.TEXT, "Basic"),
        _field("firstName", "First Name", T.TEXT, "Basic"),
        _field("lastName", "Last Name", T.TEXT, "Basic"),
        _field("email", "Email", T.TEXT, "Basic"),
        _field("phone", "Phone", T.TEXT, "Basic"),
        _field("gender", "Gender", T.ENUM, "Basic", choices.Gender.values),
        _field("dateOfBirth", "Date of Birth", T.DATE, "Basic"),
        _field("joiningDate", "Joining Date", T.DATE, "Employment"),
        _field("exitDate", "Exit Date", T.DATE, "Employment"),
        _field("status", "Status", T.ENUM, "Employment", choices.EmployeeStatus.values),
        _field(
            "employmentType", "Employment Type", T.ENUM, "Employment",
            choices.EmploymentType.values,
        ),
        _field("isActive", "Active", T.BOOLEAN, "Employment"),
        _field("department.name", "Department", T.TEXT, "Organization"),
        _field("designation.name", "Designation", T.TEXT, "Organization"),
        _field("location.name", "Location", T.TEXT, "Organization"),
        _field("reportingManager.firstName", "Manager First Name", T.TEXT, "Organization"),
        _field("reportingManager.lastName", "Manager Last Name", T.TEXT, "Organization"),
        _field("permanentAddress", "Permanent Address", T.TEXT, "Address"),
        _field("currentAddress", "Current Address", T.TEXT, "Address"),
        _field("bankName", "Bank Name", T.TEXT, "Bank"),
        _field("bankAccountNumber", "Account Number", T.TEXT, "Bank"),
        _field("ifscCode", "IFSC Code", T.TEXT, "Bank"),
        _field("panNumber", "PAN Number", T.TEXT, "Tax"),
        _field("aadhaarNumber", "Aadhaar Number", T.TEXT, "Tax"),
        _field("uanNumber", "UAN Number", T.TEXT, "Tax"),
        _field("pfNumber", "PF Number", T.TEXT, "Tax"),
        _field("esiNumber", "ESI Number", T.TEXT, "Tax"),
        _field("createdAt", "Created At", T.DATE, "System"),
        _field("updatedAt", "Updated At", T.DATE, "System"),
    ),
    DataSource.ATTENDANCE: (
        _field("id", "Record ID", T.NUMBER, "Basic"),
        *_person_fields("user", "Employee"),
        _field("date", "Date", T.DATE, "Attendance"),
        _field("status", "Status", T.ENUM, "Attendance", choices.AttendanceStatus.values),
        _field("checkIn", "Check In", T.DATE, "Timing"),
        _field("checkOut", "Check Out", T.DATE, "Timing"),
        _field("totalHours", "Total Hours", T.NUMBER, "Timing"),
        _field("overtimeHours", "Overtime Hours", T.NUMBER, "Timing"),
        _field("isLate", "Late", T.BOOLEAN, "Timing"),
        _field("isEarlyLeave", "Early Leave", T.BOOLEAN, "Timing"),
        _field("notes", "Notes", T.TEXT, "Basic"),
    ),
    DataSource.LEAVE: (
        _field("id", "Request ID", T.NUMBER, "Basic"),
        *_person_fields("user", "Employee"),
        _field("leaveType.name", "Leave Type", T.TEXT, "Leave"),
        _field("fromDate", "From Date", T.DATE, "Leave"),
        _field("toDate", "To Date", T.DATE, "Leave"),
        _field("totalDays", "Total Days", T.NUMBER, "Leave"),
        _field("status", "Status", T.ENUM, "Leave", choices.LeaveStatus.values),
        _field("reason", "Reason", T.TEXT, "Leave"),
        _field("approver.firstName", "Approver First Name", T.TEXT, "Approval"),
        _field("approver.lastName", "Approver Last Name", T.TEXT, "Approval"),
        _field("approvedAt", "Approved At", T.DATE, "Approval"),
        _field("rejectionReason", "Rejection Reason", T.TEXT, "Approval"),
        _field("createdAt", "Applied At", T.DATE, "System"),
    ),
    DataSource.PAYROLL: (
        _field("id", "Payslip ID", T.NUMBER, "Basic"),
        *_person_fields("user", "Employee"),
        _field("month", "Month", T.NUMBER, "Period"),
        _field("year", "Year", T.NUMBER, "Period"),
        _field("basicSalary", "Basic Salary", T.CURRENCY, "Earnings"),
        _field("grossSalary", "Gross Salary", T.CURRENCY, "Earnings"),
        _field("totalEarnings", "Total Earnings", T.CURRENCY, "Earnings"),
        _field("totalDeductions", "Total Deductions", T.CURRENCY, "Deductions"),
        _field("netSalary", "Net Salary", T.CURRENCY, "Summary"),
        _field("paidDays", "Paid Days", T.NUMBER, "Days"),
        _field("lopDays", "LOP Days", T.NUMBER, "Days"),
        _field("status", "Status", T.ENUM, "Basic", choices.PayslipStatus.values),
        _field("paymentDate", "Payment Date", T.DATE, "Payment"),
        _field("paymentMode", "Payment Mode", T.TEXT, "Payment"),
        _field("transactionRef", "Transaction Ref", T.TEXT, "Payment"),
    ),
    DataSource.GOALS: (
        _field("id", "Goal ID", T.NUMBER, "Basic"),
        _field("title", "Title", T.TEXT, "Basic"),
        _field("description", "Description", T.TEXT, "Basic"),
        _field("owner.firstName", "Owner First Name", T.TEXT, "Owner"),
        _field("owner.lastName", "Owner Last Name", T.TEXT, "Owner"),
        _field("owner.department.name", "Owner Department", T.TEXT, "Owner"),
        _field("type", "Type", T.ENUM, "Basic", choices.GoalType.values),
        _field("category", "Category", T.ENUM, "Basic", choices.GoalCategory.values),
        _field("status", "Status", T.ENUM, "Progress", choices.GoalStatus.values),
        _field("priority", "Priority", T.ENUM, "Basic", choices.Priority.values),
        _field("progress", "Progress %", T.PERCENTAGE, "Progress"),
        _field("startDate", "Start Date", T.DATE, "Timeline"),
        _field("endDate", "End Date", T.DATE, "Timeline"),
        _field("targetValue", "Target Value", T.NUMBER, "Metrics"),
        _field("currentValue", "Current Value", T.NUMBER, "Metrics"),
        _field("unit", "Unit", T.TEXT, "Metrics"),
    ),
    DataSource.REVIEWS: (
        _field("id", "Review ID", T.NUMBER, "Basic"),
        *_person_fields("employee", "Employee"),
        _field("reviewCycle.name", "Review Cycle", T.TEXT, "Cycle"),
        _field("status", "Status", T.ENUM, "Review", choices.ReviewStatus.values),
        _field("selfRating", "Self Rating", T.NUMBER, "Rating"),
        _field("managerRating", "Manager Rating", T.NUMBER, "Rating"),
        _field("finalRating", "Final Rating", T.NUMBER, "Rating"),
        _field("selfSubmittedAt", "Self Submitted At", T.DATE, "Timeline"),
        _field("managerSubmittedAt", "Manager Submitted At", T.DATE, "Timeline"),
        _field("completedAt", "Completed At", T.DATE, "Timeline"),
    ),
    DataSource.TRAINING: (
        _field("id", "Program ID", T.NUMBER, "Basic"),
        _field("name", "Name", T.TEXT, "Basic"),
        _field("description", "Description", T.TEXT, "Basic"),
        _field("type", "Type", T.ENUM, "Basic", choices.TrainingType.values),
        _field("status", "Status", T.ENUM, "Basic", choices.TrainingStatus.values),
        _field("startDate", "Start Date", T.DATE, "Schedule"),
        _field("endDate", "End Date", T.DATE, "Schedule"),
        _field("trainer", "Trainer", T.TEXT, "Details"),
        _field("venue", "Venue", T.TEXT, "Details"),
        _field("capacity", "Capacity", T.NUMBER, "Details"),
        _field("cost", "Cost", T.CURRENCY, "Details"),
        _field("enrollmentCount", "Enrollments", T.NUMBER, "Stats"),
    ),
    DataSource.EXPENSES: (
        _field("id", "Expense ID", T.NUMBER, "Basic"),
        *_person_fields("user", "Employee"),
        _field("category.name", "Category", T.TEXT, "Expense"),
        _field("title", "Title", T.TEXT, "Expense"),
        _field("description", "Description", T.TEXT, "Expense"),
        _field("amount", "Amount", T.CURRENCY, "Expense"),
        _field("expenseDate", "Expense Date", T.DATE, "Expense"),
        _field("status", "Status", T.ENUM, "Workflow", choices.ExpenseStatus.values),
        _field("approvedAmount", "Approved Amount", T.CURRENCY, "Workflow"),
        _field("reimbursedAt", "Reimbursed At", T.DATE, "Workflow"),
    ),
    DataSource.ASSETS: (
        _field("id", "Asset ID", T.NUMBER, "Basic"),
        _field("name", "Name", T.TEXT, "Basic"),
        _field("category.name", "Category", T.TEXT, "Basic"),
        _field("serialNumber", "Serial Number", T.TEXT, "Details"),
        _field("assetTag", "Asset Tag", T.TEXT, "Details"),
        _field("status", "Status", T.ENUM, "Status", choices.AssetStatus.values),
        _field("condition", "Condition", T.ENUM, "Status", choices.AssetCondition.values),
        _field("purchaseDate", "Purchase Date", T.DATE, "Purchase"),
        _field("purchaseCost", "Purchase Cost", T.CURRENCY, "Purchase"),
        _field("currentValue", "Current Value", T.CURRENCY, "Value"),
        _field("warrantyExpiry", "Warranty Expiry", T.DATE, "Details"),
        _field("assignee.firstName", "Assignee First Name", T.TEXT, "Assignment"),
        _field("assignee.lastName", "Assignee Last Name", T.TEXT, "Assignment"),
    ),
    DataSource.RECRUITMENT: (
        _field("id", "Application ID", T.NUMBER, "Basic"),
        _field("job.title", "Job Title", T.TEXT, "Job"),
        _field("job.department.name", "Department", T.TEXT, "Job"),
        _field("job.status", "Job Status", T.ENUM, "Job", choices.JobStatus.values),
        _field("candidateName", "Candidate Name", T.TEXT, "Candidate"),
        _field("candidateEmail", "Candidate Email", T.TEXT, "Candidate"),
        _field("candidatePhone", "Candidate Phone", T.TEXT, "Candidate"),
        _field("source", "Source", T.TEXT, "Candidate"),
        _field("stage", "Stage", T.ENUM, "Pipeline", choices.ApplicationStage.values),
        _field("rating", "Rating", T.NUMBER, "Evaluation"),
        _field("currentSalary", "Current Salary", T.CURRENCY, "Salary"),
        _field("expectedSalary", "Expected Salary", T.CURRENCY, "Salary"),
        _field("appliedAt", "Applied At", T.DATE, "Timeline"),
    ),
}

_FIELD_INDEX: dict[DataSource, dict[str, FieldDescriptor]] = {
    source: {descriptor.id: descriptor for descriptor in descriptors}
    for source, descriptors in FIELD_REGISTRY.items()
}


def parse_data_source(value: Any) -> DataSource:
    """Return the ``DataSource`` for ``value`` or raise ``UnknownDataSource``."""
    if isinstance(value, DataSource):
        return value
    try:
        return DataSource(str(value).strip().upper())
    except ValueError:
        raise UnknownDataSource(
            f"Invalid data source: {value}",
            details={"dataSource": value, "allowed": list(DataSource.values)},
        ) from None


def fields_for(data_source: Any) -> list[FieldDescriptor]:
    return list(FIELD_REGISTRY[parse_data_source(data_source)])


def get_field(data_source: Any, field_id: str) -> FieldDescriptor:
    source = parse_data_source(data_source)
    descriptor = _FIELD_INDEX[source].get(field_id)
    if descriptor is None:
        raise InvalidField(
            f"Invalid field: {field_id}",
            details={"field": field_id, "dataSource": source.value},
        )
    return descriptor


def operators_for(field_type: Any) -> list[str]:
    return list(OPERATORS_BY_TYPE[FieldType(field_type)])


def operator_catalog() -> dict[str, list[str]]:
    return {field_type.value: list(ops) for field_type, ops in OPERATORS_BY_TYPE.items()}


def field_meta(data_source: Any, field_ids: Iterable[str]) -> list[dict[str, Any]]:
    """Descriptors of the selected fields, in registry order."""
    selected = set(field_ids)
    return [d.as_dict() for d in fields_for(data_source) if d.id in selected]


def data_source_summaries() -> list[dict[str, Any]]:
    return [
        {
            "id": source.value,
            "name": source.value.capitalize(),
            "fieldCount": len(FIELD_REGISTRY[source]),
        }
        for source in DataSource
    ]


def describe_fields(data_source: Any = None) -> dict[str, Any]:
    """Field catalog payload: one source's fields, or a summary of every source."""
    if data_source in (None, ""):
        return {"dataSources": data_source_summaries(), "operators": operator_catalog()}
    source = parse_data_source(data_source)
    return {
        "dataSource": source.value,
        "fields": [d.as_dict() for d in FIELD_REGISTRY[source]],
        "operators": operator_catalog(),
    }


__all__ = [
    "OPERATORS_BY_TYPE",
    "FIELD_REGISTRY",
    "parse_data_source",
    "fields_for",
    "get_field",
    "operators_for",
    "operator_catalog",
    "field_meta",
    "data_source_summaries",
    "describe_fields",
]

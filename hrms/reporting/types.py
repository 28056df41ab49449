"""
Data classes, enums and errors for the custom report builder.

This module contains the core type definitions used throughout the reporting
package: the closed set of data sources, field and aggregation types, the
declarative report spec and the error taxonomy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from django.db import models


class ReportingError(Exception):
    """
    Base class for every client-facing report builder failure.

    Each subclass carries a stable ``code`` and the HTTP status the API layer
    answers with.
    """

    code = "REPORTING_ERROR"
    status_code = 400
    default_message = "Report request could not be processed"

    def __init__(self, message: Optional[str] = None, *, details: Optional[dict] = None):
        self.message = message or self.default_message
        self.details = dict(details or {})
        super().__init__(self.message)

    def as_dict(self) -> dict[str, Any]:
        return {"message": self.message, "code": self.code, "details": self.details}


class UnknownDataSource(ReportingError):
    code = "UNKNOWN_DATA_SOURCE"
    default_message = "Invalid data source"


class InvalidField(ReportingError):
    code = "INVALID_FIELD"
    default_message = "Invalid field"


class InvalidOperator(ReportingError):
    code = "INVALID_OPERATOR"
    default_message = "Invalid filter operator"


class MalformedFilterValue(ReportingError):
    code = "MALFORMED_FILTER_VALUE"
    default_message = "Malformed filter value"


class InvalidReportSpec(ReportingError):
    code = "INVALID_REPORT_SPEC"
    default_message = "Invalid report definition"


class DuplicateTemplateName(ReportingError):
    code = "DUPLICATE_TEMPLATE_NAME"
    status_code = 409
    default_message = "A template with this name already exists"


class SystemTemplateImmutable(ReportingError):
    code = "SYSTEM_TEMPLATE_IMMUTABLE"
    default_message = "System templates cannot be modified"


class AccessDenied(ReportingError):
    code = "ACCESS_DENIED"
    status_code = 403
    default_message = "Access denied"


class TemplateNotFound(ReportingError):
    code = "TEMPLATE_NOT_FOUND"
    status_code = 404
    default_message = "Template not found"


class GeneratedReportNotFound(ReportingError):
    code = "REPORT_NOT_FOUND"
    status_code = 404
    default_message = "Report not found"


class AuthenticationRequired(ReportingError):
    code = "AUTHENTICATION_REQUIRED"
    status_code = 401
    default_message = "Authentication required"


class DataSource(models.TextChoices):
    EMPLOYEES = "EMPLOYEES", "Employees"
    ATTENDANCE = "ATTENDANCE", "Attendance"
    LEAVE = "LEAVE", "Leave"
    PAYROLL = "PAYROLL", "Payroll"
    GOALS = "GOALS", "Goals"
    REVIEWS = "REVIEWS", "Reviews"
    TRAINING = "TRAINING", "Training"
    EXPENSES = "EXPENSES", "Expenses"
    ASSETS = "ASSETS", "Assets"
    RECRUITMENT = "RECRUITMENT", "Recruitment"


class FieldType(models.TextChoices):
    TEXT = "TEXT", "Text"
    NUMBER = "NUMBER", "Number"
    DATE = "DATE", "Date"
    BOOLEAN = "BOOLEAN", "Boolean"
    CURRENCY = "CURRENCY", "Currency"
    PERCENTAGE = "PERCENTAGE", "Percentage"
    ENUM = "ENUM", "Enum"


class AggregationType(models.TextChoices):
    COUNT = "COUNT", "Count"
    SUM = "SUM", "Sum"
    AVG = "AVG", "Average"
    MIN = "MIN", "Minimum"
    MAX = "MAX", "Maximum"


class SortDirection(models.TextChoices):
    ASC = "asc", "Ascending"
    DESC = "desc", "Descending"


class ChartType(models.TextChoices):
    TABLE = "TABLE", "Table"
    BAR = "BAR", "Bar"
    LINE = "LINE", "Line"
    PIE = "PIE", "Pie"
    AREA = "AREA", "Area"
    DONUT = "DONUT", "Donut"


@dataclass(frozen=True)
class FieldDescriptor:
    """One reportable field of a data source."""

    id: str
    display_name: str
    type: FieldType
    category: str
    options: tuple[str, ...] = ()

    def as_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "id": self.id,
            "displayName": self.display_name,
            "type": self.type.value,
            "category": self.category,
        }
        if self.options:
            payload["options"] = list(self.options)
        return payload


@dataclass(frozen=True)
class FilterSpec:
    """Declarative filter; filters of one report combine with AND."""

    field: str
    operator: str
    value: Any = None

    def as_dict(self) -> dict[str, Any]:
        return {"field": self.field, "operator": self.operator, "value": self.value}


@dataclass(frozen=True)
class SortSpec:
    field: str
    direction: SortDirection = SortDirection.ASC

    def as_dict(self) -> dict[str, Any]:
        return {"field": self.field, "direction": self.direction.value}


@dataclass(frozen=True)
class AggregationSpec:
    field: str
    type: AggregationType

    @property
    def key(self) -> str:
        return f"{self.field}_{self.type.value}"

    def as_dict(self) -> dict[str, Any]:
        return {"field": self.field, "type": self.type.value}


@dataclass(frozen=True)
class ReportSpec:
    """Normalized report definition shared by preview, templates and runs."""

    data_source: DataSource
    selected_fields: tuple[str, ...]
    filters: tuple[FilterSpec, ...] = ()
    sort_by: tuple[SortSpec, ...] = ()
    aggregations: tuple[AggregationSpec, ...] = ()
    group_by: tuple[str, ...] = ()


__all__ = [
    "ReportingError",
    "UnknownDataSource",
    "InvalidField",
    "InvalidOperator",
    "MalformedFilterValue",
    "InvalidReportSpec",
    "DuplicateTemplateName",
    "SystemTemplateImmutable",
    "AccessDenied",
    "TemplateNotFound",
    "GeneratedReportNotFound",
    "AuthenticationRequired",
    "DataSource",
    "FieldType",
    "AggregationType",
    "SortDirection",
    "ChartType",
    "FieldDescriptor",
    "FilterSpec",
    "SortSpec",
    "AggregationSpec",
    "ReportSpec",
]

"""
Response payload builders for templates and generated reports.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from ..utils.serialization import json_sanitize
from .models import GeneratedReport, ReportTemplate
from .registry import field_meta


def _iso(value) -> Optional[str]:
    return value.isoformat() if value is not None else None


def serialize_employee(employee) -> Optional[dict[str, Any]]:
    if employee is None:
        return None
    return {
        "id": employee.pk,
        "firstName": employee.first_name,
        "lastName": employee.last_name,
    }


def serialize_template(
    template: ReportTemplate,
    *,
    recent_runs: Optional[Iterable[GeneratedReport]] = None,
) -> dict[str, Any]:
    payload = {
        "id": template.pk,
        "name": template.name,
        "description": template.description,
        "dataSource": template.data_source,
        "selectedFields": list(template.selected_fields or []),
        "filters": list(template.filters or []),
        "groupBy": list(template.group_by or []),
        "sortBy": list(template.sort_by or []),
        "aggregations": list(template.aggregations or []),
        "chartType": template.chart_type,
        "chartConfig": template.chart_config,
        "isPublic": template.is_public,
        "isSystem": template.is_system,
        "schedule": template.schedule,
        "createdBy": serialize_employee(template.created_by),
        "lastRunAt": _iso(template.last_run_at),
        "createdAt": _iso(template.created_at),
        "updatedAt": _iso(template.updated_at),
    }
    if hasattr(template, "generated_report_count"):
        payload["generatedReportCount"] = template.generated_report_count
    if recent_runs is not None:
        payload["generatedReports"] = [
            serialize_generated(report, include_data=False) for report in recent_runs
        ]
    return json_sanitize(payload)


def serialize_generated(
    report: GeneratedReport,
    *,
    include_data: bool = True,
    include_field_meta: bool = False,
) -> dict[str, Any]:
    template = report.template
    payload = {
        "id": report.pk,
        "templateId": report.template_id,
        "templateName": template.name,
        "dataSource": template.data_source,
        "chartType": template.chart_type,
        "chartConfig": template.chart_config,
        "selectedFields": list(template.selected_fields or []),
        "parameters": report.parameters or {},
        "summary": report.summary or {},
        "rowCount": report.row_count,
        "generatedBy": serialize_employee(report.generated_by),
        "generatedAt": _iso(report.generated_at),
        "expiresAt": _iso(report.expires_at),
    }
    if include_data:
        payload["data"] = report.data or []
    if include_field_meta:
        payload["fieldMeta"] = field_meta(template.data_source, template.selected_fields or [])
    return json_sanitize(payload)


__all__ = ["serialize_employee", "serialize_template", "serialize_generated"]

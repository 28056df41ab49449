"""
Generated report history.

Snapshots are visible to the employee who produced them, within their tenant.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from ..filters import GeneratedReportFilterSet
from ..models import GeneratedReport
from ..serializers import serialize_generated
from ..types import GeneratedReportNotFound, InvalidReportSpec
from .access import ReportingActor
from .pagination import paginate

logger = logging.getLogger(__name__)


def _own_reports(actor: ReportingActor):
    return (
        GeneratedReport.objects.for_tenant(actor.tenant_id)
        .filter(generated_by_id=actor.user_id)
        .select_related("template", "generated_by")
    )


def _get(actor: ReportingActor, report_id: Any) -> GeneratedReport:
    try:
        return _own_reports(actor).get(pk=report_id)
    except (GeneratedReport.DoesNotExist, ValueError, TypeError):
        raise GeneratedReportNotFound(details={"id": report_id}) from None


def list_generated_reports(
    actor: ReportingActor, params: Optional[Mapping[str, Any]] = None
) -> dict[str, Any]:
    """The actor's runs, newest first, without row data."""
    params = params or {}
    filterset = GeneratedReportFilterSet(
        data=params, queryset=_own_reports(actor).order_by("-generated_at", "-id")
    )
    if not filterset.is_valid():
        raise InvalidReportSpec(
            "Invalid report filters", details=dict(filterset.errors.get_json_data())
        )
    reports, page = paginate(filterset.qs, params.get("page"), params.get("limit"))
    return {
        "reports": [serialize_generated(r, include_data=False) for r in reports],
        **page,
    }


def get_generated_report(actor: ReportingActor, report_id: Any) -> dict[str, Any]:
    return serialize_generated(_get(actor, report_id), include_field_meta=True)


def delete_generated_report(actor: ReportingActor, report_id: Any) -> dict[str, Any]:
    report = _get(actor, report_id)
    report_pk = report.pk
    report.delete()
    logger.info("Generated report %s deleted by %s", report_pk, actor.user_id)
    return {"id": report_pk, "deleted": True}


__all__ = ["list_generated_reports", "get_generated_report", "delete_generated_report"]

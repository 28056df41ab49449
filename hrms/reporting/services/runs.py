"""
Preview and run.

Preview executes an unsaved definition and stores nothing. A run executes a
saved template and persists the snapshot together with the template's
``last_run_at`` in one transaction.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from django.db import transaction
from django.http import HttpRequest
from django.utils import timezone

from ...utils.serialization import json_sanitize
from ..engine import ReportEngine, run_row_limit
from ..models import GeneratedReport
from ..serializers import serialize_generated
from ..types import InvalidReportSpec
from .access import ReportingActor
from .templates import get_visible_template

logger = logging.getLogger(__name__)


def preview_report(actor: ReportingActor, payload: Mapping[str, Any]) -> dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise InvalidReportSpec("Report definition must be an object")
    return ReportEngine(actor.tenant_id).preview(payload)


def run_template(
    actor: ReportingActor,
    template_id: Any,
    parameters: Optional[Mapping[str, Any]] = None,
    request: Optional[HttpRequest] = None,
) -> dict[str, Any]:
    """Execute a visible template and persist exactly one generated report."""
    template = get_visible_template(actor, template_id)
    parameters = dict(parameters or {})
    result = ReportEngine(actor.tenant_id).execute(
        template.definition(), limit=run_row_limit(), parameters=parameters
    )

    with transaction.atomic():
        report = GeneratedReport.objects.create(
            tenant_id=actor.tenant_id,
            template=template,
            parameters=json_sanitize(parameters),
            data=result.data,
            summary=result.summary,
            row_count=result.row_count,
            generated_by_id=actor.user_id,
        )
        template.last_run_at = report.generated_at or timezone.now()
        template.save(update_fields=["last_run_at", "updated_at"])

    logger.info(
        "Report template %s run by %s in tenant %s: %d rows",
        template.pk,
        actor.user_id,
        actor.tenant_id,
        result.row_count,
    )
    return serialize_generated(report, include_field_meta=True)


__all__ = ["preview_report", "run_template"]

"""Report builder dashboard counters."""

from __future__ import annotations

from typing import Any

from django.db.models import Count

from ..models import GeneratedReport, ReportTemplate
from ..registry import data_source_summaries
from ..serializers import serialize_generated
from .access import ReportingActor

RECENT_REPORTS = 5


def builder_stats(actor: ReportingActor) -> dict[str, Any]:
    templates = ReportTemplate.objects.for_tenant(actor.tenant_id)
    visible = ReportTemplate.objects.visible_to(actor.tenant_id, actor.user_id)
    own_runs = GeneratedReport.objects.for_tenant(actor.tenant_id).filter(
        generated_by_id=actor.user_id
    )
    by_source = (
        visible.order_by()
        .values("data_source")
        .annotate(count=Count("id"))
        .order_by("data_source")
    )
    recent = own_runs.select_related("template", "generated_by").order_by(
        "-generated_at", "-id"
    )[:RECENT_REPORTS]

    return {
        "totalTemplates": visible.count(),
        "myTemplates": templates.filter(created_by_id=actor.user_id).count(),
        "publicTemplates": templates.filter(is_public=True).count(),
        "totalGenerated": own_runs.count(),
        "recentReports": [serialize_generated(r, include_data=False) for r in recent],
        "templatesBySource": [
            {"dataSource": row["data_source"], "count": row["count"]} for row in by_source
        ],
        "dataSources": data_source_summaries(),
    }


__all__ = ["builder_stats"]

"""
ReportTemplate model: a saved, reusable report definition.
"""

from __future__ import annotations

from typing import Any

from django.db import models

from ...multitenancy.models import TenantQuerySet, TenantScopedModel
from ..types import ChartType, DataSource


class ReportTemplateQuerySet(TenantQuerySet):
    def visible_to(self, tenant_id: Any, employee_id: Any):
        """Templates the employee owns plus the tenant's public ones."""
        return self.for_tenant(tenant_id).filter(
            models.Q(created_by_id=employee_id) | models.Q(is_public=True)
        )


class ReportTemplate(TenantScopedModel):
    """
    Saved report definition.

    Owned by ``created_by``; visible to the owner and, when ``is_public``, to
    the whole tenant. System templates are never mutable through the API.
    """

    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    data_source = models.CharField(max_length=20, choices=DataSource.choices)
    selected_fields = models.JSONField(default=list)
    filters = models.JSONField(default=list, blank=True)
    group_by = models.JSONField(default=list, blank=True)
    sort_by = models.JSONField(default=list, blank=True)
    aggregations = models.JSONField(default=list, blank=True)
    chart_type = models.CharField(
        max_length=10, choices=ChartType.choices, default=ChartType.TABLE
    )
    chart_config = models.JSONField(null=True, blank=True)
    is_public = models.BooleanField(default=False)
    is_system = models.BooleanField(default=False)
    schedule = models.JSONField(
        null=True,
        blank=True,
        help_text="Stored scheduling metadata; nothing executes it.",
    )
    created_by = models.ForeignKey(
        "hrms.Employee",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="report_templates",
    )
    last_run_at = models.DateTimeField(null=True, blank=True)

    objects = ReportTemplateQuerySet.as_manager()

    class Meta:
        app_label = "hrms"
        ordering = ["-updated_at", "-id"]
        constraints = [
            models.UniqueConstraint(
                fields=["tenant", "name"], name="hrms_report_template_name_per_tenant"
            )
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.data_source})"

    def is_owned_by(self, employee_id: Any) -> bool:
        return self.created_by_id is not None and str(self.created_by_id) == str(employee_id)

    def is_visible_to(self, employee_id: Any) -> bool:
        return self.is_public or self.is_owned_by(employee_id)

    def definition(self) -> dict[str, Any]:
        """The report definition in request payload form."""
        return {
            "dataSource": self.data_source,
            "selectedFields": list(self.selected_fields or []),
            "filters": list(self.filters or []),
            "groupBy": list(self.group_by or []),
            "sortBy": list(self.sort_by or []),
            "aggregations": list(self.aggregations or []),
        }


__all__ = ["ReportTemplate"]

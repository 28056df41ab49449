"""
GeneratedReport model: an immutable snapshot of one template run.
"""

from __future__ import annotations

from datetime import timedelta

from django.db import models
from django.utils import timezone

from ...config_proxy import get_setting
from ...multitenancy.models import TenantScopedModel


def report_lifetime() -> timedelta:
    return timedelta(days=int(get_setting("reporting.report_expiry_days", 30)))


class GeneratedReport(TenantScopedModel):
    """
    Rows and summary produced by a run.

    ``expires_at`` is ``generated_at`` plus the configured lifetime. It is
    advisory; removing expired rows is left to housekeeping.
    """

    template = models.ForeignKey(
        "hrms.ReportTemplate",
        on_delete=models.CASCADE,
        related_name="generated_reports",
    )
    parameters = models.JSONField(default=dict, blank=True)
    data = models.JSONField(default=list)
    summary = models.JSONField(default=dict, blank=True)
    row_count = models.PositiveIntegerField(default=0)
    generated_by = models.ForeignKey(
        "hrms.Employee",
        on_delete=models.SET_NULL,
        null=True,
        related_name="generated_reports",
    )
    generated_at = models.DateTimeField(default=timezone.now, db_index=True)
    expires_at = models.DateTimeField(blank=True)

    class Meta:
        app_label = "hrms"
        ordering = ["-generated_at", "-id"]

    def __str__(self) -> str:
        return f"Report #{self.pk} of template {self.template_id}"

    def save(self, *args, **kwargs):
        if self.expires_at is None:
            self.expires_at = self.generated_at + report_lifetime()
        super().save(*args, **kwargs)


__all__ = ["GeneratedReport", "report_lifetime"]

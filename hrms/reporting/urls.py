"""
URL patterns for the report builder REST API.
"""

from django.urls import path

from .views import (
    BuilderStatsAPIView,
    FieldCatalogAPIView,
    GeneratedReportDetailAPIView,
    GeneratedReportListAPIView,
    PreviewAPIView,
    TemplateDetailAPIView,
    TemplateDuplicateAPIView,
    TemplateListAPIView,
    TemplateRunAPIView,
)

app_name = "report_builder"

urlpatterns = [
    path("fields/", FieldCatalogAPIView.as_view(), name="fields"),
    path("stats/", BuilderStatsAPIView.as_view(), name="stats"),
    path("preview/", PreviewAPIView.as_view(), name="preview"),
    # Templates
    path("templates/", TemplateListAPIView.as_view(), name="template-list"),
    path(
        "templates/<int:template_id>/",
        TemplateDetailAPIView.as_view(),
        name="template-detail",
    ),
    path(
        "templates/<int:template_id>/duplicate/",
        TemplateDuplicateAPIView.as_view(),
        name="template-duplicate",
    ),
    path(
        "templates/<int:template_id>/run/",
        TemplateRunAPIView.as_view(),
        name="template-run",
    ),
    # Generated reports
    path("reports/", GeneratedReportListAPIView.as_view(), name="report-list"),
    path(
        "reports/<int:report_id>/",
        GeneratedReportDetailAPIView.as_view(),
        name="report-detail",
    ),
]

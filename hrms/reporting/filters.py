"""
django-filter FilterSets for the template and generated report listings.

Query parameter names follow the API's camelCase (``dataSource``,
``isPublic``, ``templateId``).
"""

import django_filters

from .models import GeneratedReport, ReportTemplate
from .types import DataSource


class ReportTemplateFilterSet(django_filters.FilterSet):
    dataSource = django_filters.ChoiceFilter(
        field_name="data_source", choices=DataSource.choices
    )
    isPublic = django_filters.BooleanFilter(field_name="is_public")
    search = django_filters.CharFilter(field_name="name", lookup_expr="icontains")

    class Meta:
        model = ReportTemplate
        fields = []


class GeneratedReportFilterSet(django_filters.FilterSet):
    templateId = django_filters.NumberFilter(field_name="template_id")

    class Meta:
        model = GeneratedReport
        fields = []

"""
Data source adapters.

One adapter per ``DataSource`` maps the source to its Django model and runs
the bounded fetch: predicate tree to ``Q``, inclusion plan to
``select_related``, ordering to ``order_by``, limit to a slice.
``ADAPTERS`` must cover the enum exactly; ``verify_adapter_registry`` is run
from ``AppConfig.ready``.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Optional

from django.core.exceptions import FieldDoesNotExist, ImproperlyConfigured
from django.db import models
from django.db.models import Q

from ..hr import models as hr
from .compiler import (
    EMPTY_LOOKUP,
    AllOf,
    CompiledQuery,
    FieldPredicate,
    Predicate,
    RelationPredicate,
)
from .paths import parse_path, resolve_model_field
from .registry import FIELD_REGISTRY
from .types import DataSource, MalformedFilterValue

logger = logging.getLogger(__name__)


def predicate_to_q(predicate: Predicate, prefix: str = "") -> Q:
    """Translate a predicate tree into a Django ``Q`` object."""
    if isinstance(predicate, AllOf):
        combined = Q()
        for child in predicate.children:
            combined &= predicate_to_q(child, prefix)
        return combined
    if isinstance(predicate, RelationPredicate):
        return predicate_to_q(predicate.child, f"{prefix}{predicate.relation}__")
    if isinstance(predicate, FieldPredicate):
        condition = predicate.condition
        column = f"{prefix}{predicate.attribute}"
        if condition.lookup == EMPTY_LOOKUP:
            q = Q(**{f"{column}__isnull": True}) | Q(**{f"{column}__exact": ""})
        else:
            q = Q(**{f"{column}__{condition.lookup}": condition.value})
        return ~q if condition.negated else q
    raise TypeError(f"Unsupported predicate node: {predicate!r}")


def check_integer_values(predicate: Predicate, model: type[models.Model]) -> None:
    """
    Reject fractional numbers compared against integer columns.

    The database would silently truncate them, so ``id equals 1.5`` would
    match id 1.
    """
    if isinstance(predicate, AllOf):
        for child in predicate.children:
            check_integer_values(child, model)
    elif isinstance(predicate, RelationPredicate):
        related = model._meta.get_field(predicate.relation).related_model
        check_integer_values(predicate.child, related)
    elif isinstance(predicate, FieldPredicate):
        field = model._meta.get_field(predicate.attribute)
        if field.is_relation or not isinstance(field, models.IntegerField):
            return
        value = predicate.condition.value
        for item in value if isinstance(value, (list, tuple)) else (value,):
            if isinstance(item, Decimal) and item != item.to_integral_value():
                raise MalformedFilterValue(
                    f"Malformed value for filter on {predicate.attribute}: "
                    "a whole number is required",
                    details={"field": predicate.attribute, "value": str(item)},
                )


class DataSourceAdapter:
    """Tenant-scoped, bounded access to one entity collection."""

    def __init__(self, data_source: DataSource, model: type[models.Model]):
        self.data_source = data_source
        self.model = model

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.data_source.value} -> {self.model.__name__}>"

    def base_queryset(self) -> models.QuerySet:
        return self.model._default_manager.all()

    def build_queryset(self, compiled: CompiledQuery) -> models.QuerySet:
        if compiled.tenant_id is None:
            raise RuntimeError("Report queries must be scoped to a tenant before fetching")
        if compiled.data_source != self.data_source:
            raise RuntimeError(
                f"{self!r} cannot fetch a {compiled.data_source.value} query"
            )
        check_integer_values(compiled.predicate, self.model)
        queryset = self.base_queryset().filter(predicate_to_q(compiled.predicate))
        if compiled.inclusions:
            queryset = queryset.select_related(*compiled.inclusions)
        return queryset.order_by(*compiled.ordering)

    def fetch(self, compiled: CompiledQuery, limit: int) -> list[models.Model]:
        queryset = self.build_queryset(compiled)
        records = list(queryset[: max(int(limit), 0)])
        logger.debug(
            "Fetched %d %s records (limit=%d)",
            len(records),
            self.data_source.value,
            limit,
        )
        return records


ADAPTERS: dict[DataSource, DataSourceAdapter] = {
    DataSource.EMPLOYEES: DataSourceAdapter(DataSource.EMPLOYEES, hr.Employee),
    DataSource.ATTENDANCE: DataSourceAdapter(DataSource.ATTENDANCE, hr.Attendance),
    DataSource.LEAVE: DataSourceAdapter(DataSource.LEAVE, hr.LeaveRequest),
    DataSource.PAYROLL: DataSourceAdapter(DataSource.PAYROLL, hr.Payslip),
    DataSource.GOALS: DataSourceAdapter(DataSource.GOALS, hr.Goal),
    DataSource.REVIEWS: DataSourceAdapter(DataSource.REVIEWS, hr.PerformanceReview),
    DataSource.TRAINING: DataSourceAdapter(DataSource.TRAINING, hr.TrainingProgram),
    DataSource.EXPENSES: DataSourceAdapter(DataSource.EXPENSES, hr.ExpenseClaim),
    DataSource.ASSETS: DataSourceAdapter(DataSource.ASSETS, hr.Asset),
    DataSource.RECRUITMENT: DataSourceAdapter(DataSource.RECRUITMENT, hr.JobApplication),
}


def _unresolvable_fields(adapter: DataSourceAdapter) -> list[str]:
    broken = []
    for descriptor in FIELD_REGISTRY[adapter.data_source]:
        try:
            resolve_model_field(adapter.model, parse_path(descriptor.id))
        except (FieldDoesNotExist, ValueError):
            broken.append(descriptor.id)
    return broken


def verify_adapter_registry(adapters: Optional[dict[DataSource, Any]] = None) -> None:
    """
    Fail with ``ImproperlyConfigured`` unless every data source has exactly
    one adapter and every registry field resolves on the adapter's model.
    """
    adapters = ADAPTERS if adapters is None else adapters
    expected = set(DataSource)
    missing = expected - set(adapters)
    extra = set(adapters) - expected
    if missing or extra:
        raise ImproperlyConfigured(
            "Report data source adapters out of sync: "
            f"missing={sorted(str(m) for m in missing)} extra={sorted(str(e) for e in extra)}"
        )

    problems = {}
    for source, adapter in adapters.items():
        if adapter.data_source != source:
            problems[source.value] = [f"adapter registered for {adapter.data_source.value}"]
            continue
        broken = _unresolvable_fields(adapter)
        if broken:
            problems[source.value] = broken
    if problems:
        raise ImproperlyConfigured(f"Report fields do not resolve on their models: {problems}")


__all__ = [
    "ADAPTERS",
    "DataSourceAdapter",
    "check_integer_values",
    "predicate_to_q",
    "verify_adapter_registry",
]

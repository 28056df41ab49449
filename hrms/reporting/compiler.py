"""
Query compiler for the report builder.

Turns a declarative report definition into a ``CompiledQuery``: an immutable
predicate tree whose nesting mirrors the relation segments of each filtered
field, an inclusion plan naming the relation chains to fetch, and an ordering.

Compilation is a pure transform over its inputs and the field registry. The
tenant predicate, the employee "active only" default and run parameters are
layered on afterwards with ``scope_to_tenant``, ``apply_default_filters`` and
``apply_parameters``, each returning a new ``CompiledQuery``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from functools import reduce
from typing import Any, Mapping, Optional, Sequence, Union

from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from .paths import FieldPath, parse_path
from .registry import get_field, operators_for, parse_data_source
from .types import (
    AggregationSpec,
    AggregationType,
    DataSource,
    FieldType,
    FilterSpec,
    InvalidOperator,
    InvalidReportSpec,
    MalformedFilterValue,
    ReportSpec,
    SortDirection,
    SortSpec,
)

logger = logging.getLogger(__name__)

DEFAULT_ORDERING = ("-created_at", "-id")

# Pseudo lookup: the value is NULL or a blank string.
EMPTY_LOOKUP = "isempty"

# operator -> (ORM lookup, negated)
OPERATOR_LOOKUPS: dict[str, tuple[str, bool]] = {
    "equals": ("exact", False),
    "contains": ("icontains", False),
    "startsWith": ("istartswith", False),
    "endsWith": ("iendswith", False),
    "gt": ("gt", False),
    "gte": ("gte", False),
    "lt": ("lt", False),
    "lte": ("lte", False),
    "between": ("range", False),
    "in": ("in", False),
    "notIn": ("in", True),
    "isEmpty": (EMPTY_LOOKUP, False),
    "isNotEmpty": (EMPTY_LOOKUP, True),
}

_NUMERIC_TYPES = {FieldType.NUMBER, FieldType.CURRENCY, FieldType.PERCENTAGE}


# --------------------------------------------------------------------------- #
# Predicate tree
# --------------------------------------------------------------------------- #


@dataclass(frozen=True)
class Condition:
    lookup: str
    value: Any
    negated: bool = False


@dataclass(frozen=True)
class FieldPredicate:
    """Leaf: a condition on a field of the current model."""

    attribute: str
    condition: Condition


@dataclass(frozen=True)
class RelationPredicate:
    """A predicate evaluated on the target of a relation."""

    relation: str
    child: "Predicate"


@dataclass(frozen=True)
class AllOf:
    children: tuple["Predicate", ...] = ()

    def extend(self, *predicates: "Predicate") -> "AllOf":
        return AllOf(children=self.children + tuple(predicates))


Predicate = Union[FieldPredicate, RelationPredicate, AllOf]


def nest(path: FieldPath, condition: Condition) -> Predicate:
    """Build the predicate for ``path``, one relation node per segment."""
    return reduce(
        lambda child, relation: RelationPredicate(relation=relation, child=child),
        reversed(path.relations),
        FieldPredicate(attribute=path.leaf, condition=condition),
    )


def constrains(predicate: Predicate, field_id: str) -> bool:
    """True when ``predicate`` holds a condition on the given top-level field."""
    attribute = parse_path(field_id).leaf
    if isinstance(predicate, FieldPredicate):
        return predicate.attribute == attribute
    if isinstance(predicate, AllOf):
        return any(constrains(child, field_id) for child in predicate.children)
    return False


@dataclass(frozen=True)
class CompiledQuery:
    data_source: DataSource
    predicate: AllOf
    inclusions: tuple[str, ...]
    ordering: tuple[str, ...]
    selected_fields: tuple[str, ...]
    aggregations: tuple[AggregationSpec, ...] = ()
    tenant_id: Optional[Any] = None


# --------------------------------------------------------------------------- #
# Spec normalization
# --------------------------------------------------------------------------- #


def _as_list(value: Any, name: str) -> list:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise InvalidReportSpec(f"{name} must be a list", details={"field": name})
    return list(value)


def _field_id(raw: Any, name: str) -> str:
    if not isinstance(raw, str) or not raw.strip():
        raise InvalidReportSpec(f"{name} entries must be field ids", details={"field": name})
    return raw.strip()


def _parse_filter(raw: Any) -> FilterSpec:
    if isinstance(raw, FilterSpec):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidReportSpec("Each filter must be an object", details={"filter": raw})
    return FilterSpec(
        field=_field_id(raw.get("field"), "filters"),
        operator=str(raw.get("operator") or ""),
        value=raw.get("value"),
    )


def _parse_sort(raw: Any) -> SortSpec:
    if isinstance(raw, SortSpec):
        return raw
    if isinstance(raw, str):
        return SortSpec(field=_field_id(raw, "sortBy"))
    if not isinstance(raw, Mapping):
        raise InvalidReportSpec("Each sort entry must be an object", details={"sort": raw})
    direction = str(raw.get("direction") or "asc").lower()
    try:
        parsed_direction = SortDirection(direction)
    except ValueError:
        raise InvalidReportSpec(
            f"Invalid sort direction: {direction}",
            details={"direction": direction, "allowed": list(SortDirection.values)},
        ) from None
    return SortSpec(field=_field_id(raw.get("field"), "sortBy"), direction=parsed_direction)


def _parse_aggregation(raw: Any) -> AggregationSpec:
    if isinstance(raw, AggregationSpec):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidReportSpec(
            "Each aggregation must be an object", details={"aggregation": raw}
        )
    agg_type = str(raw.get("type") or "").upper()
    try:
        parsed_type = AggregationType(agg_type)
    except ValueError:
        raise InvalidReportSpec(
            f"Invalid aggregation type: {raw.get('type')}",
            details={"type": raw.get("type"), "allowed": list(AggregationType.values)},
        ) from None
    return AggregationSpec(field=_field_id(raw.get("field"), "aggregations"), type=parsed_type)


def normalize_report_spec(payload: Mapping[str, Any]) -> ReportSpec:
    """
    Build a ``ReportSpec`` from a camelCase request payload.

    Only shapes are checked here; field and operator validity is the
    compiler's job.
    """
    if not isinstance(payload, Mapping):
        raise InvalidReportSpec("Report definition must be an object")
    data_source = parse_data_source(payload.get("dataSource"))
    selected = tuple(
        _field_id(item, "selectedFields")
        for item in _as_list(payload.get("selectedFields"), "selectedFields")
    )
    if not selected:
        raise InvalidReportSpec(
            "At least one field must be selected", details={"field": "selectedFields"}
        )
    return ReportSpec(
        data_source=data_source,
        selected_fields=selected,
        filters=tuple(_parse_filter(f) for f in _as_list(payload.get("filters"), "filters")),
        sort_by=tuple(_parse_sort(s) for s in _as_list(payload.get("sortBy"), "sortBy")),
        aggregations=tuple(
            _parse_aggregation(a)
            for a in _as_list(payload.get("aggregations"), "aggregations")
        ),
        group_by=tuple(
            _field_id(g, "groupBy") for g in _as_list(payload.get("groupBy"), "groupBy")
        ),
    )


# --------------------------------------------------------------------------- #
# Filter values
# --------------------------------------------------------------------------- #


def _malformed(spec: FilterSpec, reason: str) -> MalformedFilterValue:
    return MalformedFilterValue(
        f"Malformed value for filter on {spec.field}: {reason}",
        details={"field": spec.field, "operator": spec.operator, "value": spec.value},
    )


def _coerce_scalar(spec: FilterSpec, field_type: FieldType, value: Any) -> Any:
    if value is None or isinstance(value, (list, tuple, dict)):
        raise _malformed(spec, "a single value is required")

    if field_type in _NUMERIC_TYPES:
        if isinstance(value, bool):
            raise _malformed(spec, "a number is required")
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            raise _malformed(spec, "a number is required") from None
        if not number.is_finite():
            raise _malformed(spec, "a finite number is required")
        return number

    if field_type == FieldType.DATE:
        if isinstance(value, datetime):
            return _make_aware(value)
        if isinstance(value, date):
            return value
        try:
            parsed = _parse_temporal(str(value).strip())
        except ValueError:
            parsed = None
        if parsed is None:
            raise _malformed(spec, "an ISO date is required")
        if isinstance(parsed, datetime):
            return _make_aware(parsed)
        return parsed

    if field_type == FieldType.BOOLEAN:
        if isinstance(value, bool):
            return value
        lowered = str(value).strip().lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
        raise _malformed(spec, "a boolean is required")

    return value if isinstance(value, str) else str(value)


def _condition_for(spec: FilterSpec, field_type: FieldType) -> Condition:
    lookup, negated = OPERATOR_LOOKUPS[spec.operator]
    value = spec.value

    if lookup == EMPTY_LOOKUP:
        return Condition(lookup=lookup, value=True, negated=negated)

    if spec.operator == "between":
        if not isinstance(value, (list, tuple)) or len(value) != 2:
            raise _malformed(spec, "between requires exactly two values")
        low, high = (_coerce_scalar(spec, field_type, bound) for bound in value)
        return Condition(lookup=lookup, value=(low, high))

    if spec.operator in ("in", "notIn"):
        if not isinstance(value, (list, tuple)):
            raise _malformed(spec, f"{spec.operator} requires a list of values")
        coerced = tuple(_coerce_scalar(spec, field_type, item) for item in value)
        return Condition(lookup=lookup, value=coerced, negated=negated)

    return Condition(lookup=lookup, value=_coerce_scalar(spec, field_type, value), negated=negated)


# --------------------------------------------------------------------------- #
# Compilation
# --------------------------------------------------------------------------- #


def _validated_path(data_source: DataSource, field_id: str) -> FieldPath:
    get_field(data_source, field_id)
    return parse_path(field_id)


def compile_filter(data_source: DataSource, spec: FilterSpec) -> Predicate:
    descriptor = get_field(data_source, spec.field)
    allowed = operators_for(descriptor.type)
    if spec.operator not in allowed:
        raise InvalidOperator(
            f"Invalid operator '{spec.operator}' for field {spec.field}",
            details={
                "field": spec.field,
                "operator": spec.operator,
                "allowed": allowed,
            },
        )
    return nest(parse_path(spec.field), _condition_for(spec, descriptor.type))


def _inclusion_plan(paths: Sequence[FieldPath]) -> tuple[str, ...]:
    chains = {path.relation_chain for path in paths if path.relation_chain}
    return tuple(sorted(chains))


def _ordering(data_source: DataSource, sort_by: Sequence[SortSpec]) -> tuple[str, ...]:
    if not sort_by:
        return DEFAULT_ORDERING
    ordering = []
    for sort in sort_by:
        path = _validated_path(data_source, sort.field)
        prefix = "-" if sort.direction == SortDirection.DESC else ""
        ordering.append(f"{prefix}{path.orm_path}")
    return tuple(ordering)


def compile_report(spec: Union[ReportSpec, Mapping[str, Any]]) -> CompiledQuery:
    """
    Validate ``spec`` against the registry and compile it.

    Raises ``UnknownDataSource``, ``InvalidField``, ``InvalidOperator``,
    ``MalformedFilterValue`` or ``InvalidReportSpec``.
    """
    if not isinstance(spec, ReportSpec):
        spec = normalize_report_spec(spec)
    if not spec.selected_fields:
        raise InvalidReportSpec(
            "At least one field must be selected", details={"field": "selectedFields"}
        )

    data_source = spec.data_source
    selected = [_validated_path(data_source, f) for f in spec.selected_fields]
    predicates = tuple(compile_filter(data_source, f) for f in spec.filters)
    filtered = [parse_path(f.field) for f in spec.filters]
    sorted_paths = [_validated_path(data_source, s.field) for s in spec.sort_by]
    aggregated = [_validated_path(data_source, a.field) for a in spec.aggregations]
    for group_field in spec.group_by:
        _validated_path(data_source, group_field)

    compiled = CompiledQuery(
        data_source=data_source,
        predicate=AllOf(children=predicates),
        inclusions=_inclusion_plan(selected + filtered + sorted_paths + aggregated),
        ordering=_ordering(data_source, spec.sort_by),
        selected_fields=tuple(spec.selected_fields),
        aggregations=tuple(spec.aggregations),
    )
    logger.debug(
        "Compiled %s report: %d fields, %d filters, inclusions=%s",
        data_source.value,
        len(selected),
        len(predicates),
        compiled.inclusions,
    )
    return compiled


def scope_to_tenant(compiled: CompiledQuery, tenant_id: Any) -> CompiledQuery:
    """Prepend the tenant predicate; every fetch requires it."""
    if tenant_id in (None, ""):
        raise ValueError("A tenant is required to scope a report query")
    tenant_predicate = FieldPredicate(
        attribute="tenant_id", condition=Condition(lookup="exact", value=tenant_id)
    )
    return replace(
        compiled,
        predicate=AllOf(children=(tenant_predicate,) + compiled.predicate.children),
        tenant_id=tenant_id,
    )


def apply_default_filters(compiled: CompiledQuery) -> CompiledQuery:
    """Employees reports only cover active employees unless asked otherwise."""
    if compiled.data_source != DataSource.EMPLOYEES:
        return compiled
    if constrains(compiled.predicate, "isActive"):
        return compiled
    active_only = FieldPredicate(
        attribute="is_active", condition=Condition(lookup="exact", value=True)
    )
    return replace(compiled, predicate=compiled.predicate.extend(active_only))


def _parse_temporal(text: str) -> Optional[Union[date, datetime]]:
    """Parse ISO text; a bare date stays a ``date`` instead of midnight."""
    if "T" not in text and " " not in text:
        return parse_date(text)
    return parse_datetime(text)


def _parameter_bound(name: str, raw: Any, *, end: bool) -> datetime:
    try:
        parsed = _parse_temporal(str(raw).strip())
    except ValueError:
        parsed = None
    if parsed is None:
        raise MalformedFilterValue(
            f"Invalid {name} parameter: {raw}", details={"parameter": name, "value": raw}
        )
    if isinstance(parsed, datetime):
        return parsed
    bound = datetime.max.time() if end else datetime.min.time()
    return datetime.combine(parsed, bound)


def apply_parameters(
    compiled: CompiledQuery, parameters: Optional[Mapping[str, Any]]
) -> CompiledQuery:
    """
    Merge run parameters into the predicate tree.

    ``startDate`` / ``endDate`` restrict the record creation timestamp to an
    inclusive range; a bare date covers the whole day.
    """
    if not parameters:
        return compiled
    if not isinstance(parameters, Mapping):
        raise InvalidReportSpec("parameters must be an object")

    start = parameters.get("startDate")
    end = parameters.get("endDate")
    extra = []
    if start not in (None, ""):
        extra.append(
            FieldPredicate(
                attribute="created_at",
                condition=Condition("gte", _make_aware(_parameter_bound("startDate", start, end=False))),
            )
        )
    if end not in (None, ""):
        extra.append(
            FieldPredicate(
                attribute="created_at",
                condition=Condition("lte", _make_aware(_parameter_bound("endDate", end, end=True))),
            )
        )
    if not extra:
        return compiled
    return replace(compiled, predicate=compiled.predicate.extend(*extra))


def _make_aware(value: datetime) -> datetime:
    if timezone.is_naive(value):
        return timezone.make_aware(value, timezone.get_current_timezone())
    return value


__all__ = [
    "DEFAULT_ORDERING",
    "OPERATOR_LOOKUPS",
    "EMPTY_LOOKUP",
    "Condition",
    "FieldPredicate",
    "RelationPredicate",
    "AllOf",
    "Predicate",
    "CompiledQuery",
    "nest",
    "constrains",
    "normalize_report_spec",
    "compile_filter",
    "compile_report",
    "scope_to_tenant",
    "apply_default_filters",
    "apply_parameters",
]

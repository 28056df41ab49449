"""
Unit tests for the report query compiler.
"""

from datetime import date, datetime
from decimal import Decimal

import pytest
from django.utils import timezone

from hrms.reporting.compiler import (
    DEFAULT_ORDERING,
    EMPTY_LOOKUP,
    AllOf,
    FieldPredicate,
    RelationPredicate,
    apply_default_filters,
    apply_parameters,
    compile_report,
    constrains,
    normalize_report_spec,
    scope_to_tenant,
)
from hrms.reporting.registry import FIELD_REGISTRY, OPERATORS_BY_TYPE
from hrms.reporting.types import (
    AggregationType,
    DataSource,
    FieldType,
    InvalidField,
    InvalidOperator,
    InvalidReportSpec,
    MalformedFilterValue,
    SortDirection,
    UnknownDataSource,
)

pytestmark = pytest.mark.unit


def _spec(**overrides):
    spec = {"dataSource": "EMPLOYEES", "selectedFields": ["firstName"]}
    spec.update(overrides)
    return spec


def test_normalize_parses_camel_case_payload():
    spec = normalize_report_spec(
        _spec(
            filters=[{"field": "status", "operator": "equals", "value": "ACTIVE"}],
            sortBy=[{"field": "joiningDate", "direction": "DESC"}],
            aggregations=[{"field": "id", "type": "count"}],
            groupBy=["department.name"],
        )
    )
    assert spec.data_source is DataSource.EMPLOYEES
    assert spec.sort_by[0].direction is SortDirection.DESC
    assert spec.aggregations[0].type is AggregationType.COUNT
    assert spec.aggregations[0].key == "id_COUNT"
    assert spec.group_by == ("department.name",)


def test_empty_selection_is_rejected():
    with pytest.raises(InvalidReportSpec):
        compile_report(_spec(selectedFields=[]))


def test_unknown_data_source_is_rejected():
    with pytest.raises(UnknownDataSource):
        compile_report(_spec(dataSource="SALARIES"))


@pytest.mark.parametrize(
    "overrides",
    [
        {"selectedFields": ["firstName", "salary"]},
        {"filters": [{"field": "salary", "operator": "equals", "value": 1}]},
        {"sortBy": [{"field": "salary"}]},
        {"aggregations": [{"field": "salary", "type": "SUM"}]},
        {"groupBy": ["salary"]},
    ],
)
def test_fields_outside_the_registry_are_rejected(overrides):
    with pytest.raises(InvalidField):
        compile_report(_spec(**overrides))


def test_invalid_sort_direction_and_aggregation_type():
    with pytest.raises(InvalidReportSpec):
        compile_report(_spec(sortBy=[{"field": "firstName", "direction": "up"}]))
    with pytest.raises(InvalidReportSpec):
        compile_report(_spec(aggregations=[{"field": "id", "type": "MEDIAN"}]))


def test_operator_must_match_field_type():
    with pytest.raises(InvalidOperator) as excinfo:
        compile_report(
            _spec(filters=[{"field": "isActive", "operator": "contains", "value": "t"}])
        )
    assert excinfo.value.details["allowed"] == ["equals"]

    with pytest.raises(InvalidOperator):
        compile_report(
            _spec(filters=[{"field": "firstName", "operator": "like", "value": "A"}])
        )


ALL_OPERATORS = sorted({op for ops in OPERATORS_BY_TYPE.values() for op in ops})


def _field_of_each_type():
    samples = {}
    for source, descriptors in FIELD_REGISTRY.items():
        for descriptor in descriptors:
            samples.setdefault(descriptor.type, (source, descriptor.id))
    return samples


FIELD_SAMPLES = _field_of_each_type()


def test_registry_has_a_field_of_every_type():
    assert set(FIELD_SAMPLES) == set(FieldType)


@pytest.mark.parametrize(
    "field_type,operator",
    [
        (field_type, operator)
        for field_type in FieldType
        for operator in ALL_OPERATORS
        if operator not in OPERATORS_BY_TYPE[field_type]
    ],
)
def test_operators_outside_the_type_set_are_rejected(field_type, operator):
    source, field_id = FIELD_SAMPLES[field_type]
    with pytest.raises(InvalidOperator):
        compile_report(
            {
                "dataSource": source.value,
                "selectedFields": [field_id],
                "filters": [{"field": field_id, "operator": operator, "value": "x"}],
            }
        )


def test_related_filter_nests_one_node_per_segment():
    compiled = compile_report(
        {
            "dataSource": "PAYROLL",
            "selectedFields": ["netSalary"],
            "filters": [
                {"field": "user.department.name", "operator": "equals", "value": "Engineering"}
            ],
        }
    )
    (predicate,) = compiled.predicate.children
    assert isinstance(predicate, RelationPredicate)
    assert predicate.relation == "user"
    assert isinstance(predicate.child, RelationPredicate)
    assert predicate.child.relation == "department"
    leaf = predicate.child.child
    assert isinstance(leaf, FieldPredicate)
    assert leaf.attribute == "name"
    assert leaf.condition.lookup == "exact"
    assert compiled.inclusions == ("user__department",)


def test_inclusions_cover_selected_and_sorted_relations():
    compiled = compile_report(
        {
            "dataSource": "LEAVE",
            "selectedFields": ["user.firstName", "leaveType.name"],
            "sortBy": [{"field": "approver.lastName"}],
        }
    )
    assert compiled.inclusions == ("approver", "leave_type", "user")
    assert compiled.ordering == ("approver__last_name",)


def test_default_ordering_when_no_sort_given():
    assert compile_report(_spec()).ordering == DEFAULT_ORDERING


def test_sort_directions_map_to_order_by():
    compiled = compile_report(
        _spec(sortBy=[{"field": "lastName", "direction": "desc"}, {"field": "firstName"}])
    )
    assert compiled.ordering == ("-last_name", "first_name")


def test_between_coerces_numeric_bounds():
    compiled = compile_report(
        {
            "dataSource": "PAYROLL",
            "selectedFields": ["netSalary"],
            "filters": [{"field": "netSalary", "operator": "between", "value": ["100", 250.5]}],
        }
    )
    condition = compiled.predicate.children[0].condition
    assert condition.lookup == "range"
    assert condition.value == (Decimal("100"), Decimal("250.5"))


@pytest.mark.parametrize(
    "filter_spec",
    [
        {"field": "netSalary", "operator": "between", "value": [1]},
        {"field": "netSalary", "operator": "between", "value": "1,2"},
        {"field": "netSalary", "operator": "gt", "value": "lots"},
        {"field": "netSalary", "operator": "gt", "value": True},
        {"field": "paymentDate", "operator": "lt", "value": "yesterday"},
        {"field": "status", "operator": "in", "value": "PAID"},
    ],
)
def test_malformed_values_are_rejected(filter_spec):
    with pytest.raises(MalformedFilterValue):
        compile_report(
            {"dataSource": "PAYROLL", "selectedFields": ["netSalary"], "filters": [filter_spec]}
        )


def test_date_values_are_parsed():
    compiled = compile_report(
        _spec(
            filters=[
                {"field": "joiningDate", "operator": "gte", "value": "2024-01-01"},
                {"field": "createdAt", "operator": "lt", "value": "2024-01-01T10:00:00"},
            ]
        )
    )
    first, second = compiled.predicate.children
    assert first.condition.value == date(2024, 1, 1)
    assert isinstance(second.condition.value, datetime)
    assert timezone.is_aware(second.condition.value)


def test_not_in_is_negated_and_empty_checks_cover_blank_text():
    compiled = compile_report(
        _spec(
            filters=[
                {"field": "status", "operator": "notIn", "value": ["TERMINATED"]},
                {"field": "email", "operator": "isEmpty"},
                {"field": "phone", "operator": "isNotEmpty"},
            ]
        )
    )
    not_in, empty, not_empty = compiled.predicate.children
    assert not_in.condition.lookup == "in"
    assert not_in.condition.negated is True
    assert not_in.condition.value == ("TERMINATED",)
    assert (empty.condition.lookup, empty.condition.negated) == (EMPTY_LOOKUP, False)
    assert (not_empty.condition.lookup, not_empty.condition.negated) == (EMPTY_LOOKUP, True)


def test_compiled_query_is_immutable_under_scoping():
    compiled = compile_report(_spec())
    scoped = scope_to_tenant(compiled, 7)
    assert compiled.tenant_id is None
    assert compiled.predicate == AllOf()
    assert scoped.tenant_id == 7
    tenant_predicate = scoped.predicate.children[0]
    assert tenant_predicate.attribute == "tenant_id"
    assert tenant_predicate.condition.value == 7


def test_scope_requires_a_tenant():
    with pytest.raises(ValueError):
        scope_to_tenant(compile_report(_spec()), None)


def test_employees_default_to_active_only():
    compiled = apply_default_filters(compile_report(_spec()))
    (active,) = compiled.predicate.children
    assert active.attribute == "is_active"
    assert active.condition.value is True


def test_explicit_is_active_filter_replaces_default():
    compiled = compile_report(
        _spec(filters=[{"field": "isActive", "operator": "equals", "value": "false"}])
    )
    assert constrains(compiled.predicate, "isActive")
    defaulted = apply_default_filters(compiled)
    assert defaulted.predicate == compiled.predicate
    assert defaulted.predicate.children[0].condition.value is False


def test_default_filter_only_applies_to_employees():
    compiled = compile_report({"dataSource": "ASSETS", "selectedFields": ["name"]})
    assert apply_default_filters(compiled) is compiled


def test_date_parameters_bound_creation_time():
    compiled = apply_parameters(
        compile_report(_spec()), {"startDate": "2024-01-01", "endDate": "2024-01-31"}
    )
    start, end = compiled.predicate.children
    assert (start.attribute, start.condition.lookup) == ("created_at", "gte")
    assert (end.attribute, end.condition.lookup) == ("created_at", "lte")
    assert start.condition.value.date() == date(2024, 1, 1)
    assert end.condition.value.date() == date(2024, 1, 31)
    assert end.condition.value.hour == 23
    assert timezone.is_aware(end.condition.value)


def test_timed_parameters_keep_their_time():
    compiled = apply_parameters(
        compile_report(_spec()), {"endDate": "2024-01-31T08:30:00"}
    )
    (end,) = compiled.predicate.children
    assert (end.condition.value.hour, end.condition.value.minute) == (8, 30)
    assert timezone.is_aware(end.condition.value)


def test_invalid_parameter_is_rejected():
    with pytest.raises(MalformedFilterValue):
        apply_parameters(compile_report(_spec()), {"startDate": "soon"})


def test_parameters_without_dates_leave_query_unchanged():
    compiled = compile_report(_spec())
    assert apply_parameters(compiled, {"region": "EU"}) is compiled
    assert apply_parameters(compiled, None) is compiled

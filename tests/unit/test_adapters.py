"""
Unit tests for data source adapters and predicate translation.
"""

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.db.models import Q

from hrms.hr.models import Employee, Payslip
from hrms.reporting.adapters import (
    ADAPTERS,
    DataSourceAdapter,
    check_integer_values,
    predicate_to_q,
    verify_adapter_registry,
)
from hrms.reporting.compiler import (
    EMPTY_LOOKUP,
    AllOf,
    Condition,
    FieldPredicate,
    RelationPredicate,
    compile_report,
)
from hrms.reporting.types import DataSource, MalformedFilterValue

pytestmark = pytest.mark.unit


def test_adapter_registry_is_exhaustive():
    assert set(ADAPTERS) == set(DataSource)
    verify_adapter_registry()


def test_missing_adapter_is_detected():
    adapters = dict(ADAPTERS)
    adapters.pop(DataSource.ASSETS)
    with pytest.raises(ImproperlyConfigured, match="missing"):
        verify_adapter_registry(adapters)


def test_adapter_bound_to_wrong_model_is_detected():
    adapters = dict(ADAPTERS)
    adapters[DataSource.PAYROLL] = DataSourceAdapter(DataSource.PAYROLL, Employee)
    with pytest.raises(ImproperlyConfigured, match="PAYROLL"):
        verify_adapter_registry(adapters)


def test_adapter_registered_under_other_source_is_detected():
    adapters = dict(ADAPTERS)
    adapters[DataSource.GOALS] = DataSourceAdapter(DataSource.PAYROLL, Payslip)
    with pytest.raises(ImproperlyConfigured, match="GOALS"):
        verify_adapter_registry(adapters)


def test_predicate_to_q_prefixes_relations():
    predicate = AllOf(
        children=(
            FieldPredicate("tenant_id", Condition("exact", 1)),
            RelationPredicate(
                "user",
                RelationPredicate(
                    "department", FieldPredicate("name", Condition("exact", "Eng"))
                ),
            ),
        )
    )
    expected = Q() & Q(tenant_id__exact=1) & Q(user__department__name__exact="Eng")
    assert predicate_to_q(predicate) == expected


def test_negated_condition_becomes_inverted_q():
    q = predicate_to_q(FieldPredicate("status", Condition("in", ("PAID",), negated=True)))
    assert q == ~Q(status__in=("PAID",))


def test_unscoped_query_is_refused():
    compiled = compile_report({"dataSource": "PAYROLL", "selectedFields": ["netSalary"]})
    with pytest.raises(RuntimeError):
        ADAPTERS[DataSource.PAYROLL].build_queryset(compiled)


def test_empty_check_matches_null_or_blank_text():
    empty = predicate_to_q(FieldPredicate("email", Condition(EMPTY_LOOKUP, True)))
    assert empty == Q(email__isnull=True) | Q(email__exact="")
    not_empty = predicate_to_q(
        FieldPredicate("email", Condition(EMPTY_LOOKUP, True, negated=True))
    )
    assert not_empty == ~(Q(email__isnull=True) | Q(email__exact=""))


def test_fractional_value_on_integer_column_is_rejected():
    compiled = compile_report(
        {
            "dataSource": "PAYROLL",
            "selectedFields": ["netSalary"],
            "filters": [{"field": "id", "operator": "equals", "value": 1.5}],
        }
    )
    with pytest.raises(MalformedFilterValue):
        check_integer_values(compiled.predicate, Payslip)


def test_whole_and_decimal_values_pass_integer_check():
    compiled = compile_report(
        {
            "dataSource": "PAYROLL",
            "selectedFields": ["netSalary"],
            "filters": [
                {"field": "month", "operator": "between", "value": [1, "2.0"]},
                {"field": "netSalary", "operator": "gt", "value": 10.25},
                {"field": "user.firstName", "operator": "equals", "value": "Alice"},
            ],
        }
    )
    check_integer_values(compiled.predicate, Payslip)

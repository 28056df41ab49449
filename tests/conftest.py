"""
Shared fixtures: two tenants, employees with login accounts and a small HR
dataset for the first tenant.
"""

from datetime import date
from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model
from django.test import RequestFactory

from hrms.hr import models as hr
from hrms.hr.choices import EmployeeRole, EmployeeStatus, LeaveStatus
from hrms.multitenancy.models import Tenant
from hrms.reporting.services.access import ReportingActor


@pytest.fixture
def rf():
    return RequestFactory()


@pytest.fixture
def tenant(db):
    return Tenant.objects.create(name="Acme Corp", slug="acme")


@pytest.fixture
def other_tenant(db):
    return Tenant.objects.create(name="Globex", slug="globex")


@pytest.fixture
def make_employee(db):
    User = get_user_model()
    counter = {"value": 0}

    def factory(tenant, *, first_name="Emp", role=EmployeeRole.EMPLOYEE, account=True, **extra):
        counter["value"] += 1
        user = None
        if account:
            user = User.objects.create_user(
                username=f"user{counter['value']}", password="pass1234"
            )
        return hr.Employee.objects.create(
            tenant=tenant,
            account=user,
            role=role,
            employee_code=f"E{counter['value']:03d}",
            first_name=first_name,
            **extra,
        )

    return factory


@pytest.fixture
def owner(tenant, make_employee):
    return make_employee(tenant, first_name="Olivia", last_name="Owner", role=EmployeeRole.HR)


@pytest.fixture
def colleague(tenant, make_employee):
    return make_employee(tenant, first_name="Carl", last_name="Colleague")


@pytest.fixture
def outsider(other_tenant, make_employee):
    return make_employee(other_tenant, first_name="Oscar", last_name="Outsider")


@pytest.fixture
def actor(owner):
    return ReportingActor.for_employee(owner)


@pytest.fixture
def colleague_actor(colleague):
    return ReportingActor.for_employee(colleague)


@pytest.fixture
def outsider_actor(outsider):
    return ReportingActor.for_employee(outsider)


@pytest.fixture
def hr_data(tenant, other_tenant, owner, make_employee):
    """
    Engineering: Alice (active) and Bob (inactive). Sales: Dana (active, no
    manager). One employee in the other tenant. Two payslips and two leave
    requests for Alice.
    """
    engineering = hr.Department.objects.create(tenant=tenant, name="Engineering")
    sales = hr.Department.objects.create(tenant=tenant, name="Sales")
    foreign_dept = hr.Department.objects.create(tenant=other_tenant, name="Engineering")

    alice = make_employee(
        tenant,
        first_name="Alice",
        last_name="Anders",
        department=engineering,
        reporting_manager=owner,
        joining_date=date(2023, 3, 1),
        account=False,
    )
    bob = make_employee(
        tenant,
        first_name="Bob",
        last_name="Brown",
        department=engineering,
        is_active=False,
        status=EmployeeStatus.TERMINATED,
        account=False,
    )
    dana = make_employee(
        tenant, first_name="Dana", last_name="Diaz", department=sales, account=False
    )
    foreigner = make_employee(
        other_tenant, first_name="Alice", department=foreign_dept, account=False
    )

    hr.Payslip.objects.create(
        tenant=tenant, user=alice, month=1, year=2024,
        gross_salary=Decimal("5000.00"), net_salary=Decimal("4200.50"),
    )
    hr.Payslip.objects.create(
        tenant=tenant, user=alice, month=2, year=2024,
        gross_salary=Decimal("5000.00"), net_salary=Decimal("4300.00"),
    )
    hr.Payslip.objects.create(
        tenant=other_tenant, user=foreigner, month=1, year=2024,
        net_salary=Decimal("9999.00"),
    )

    annual = hr.LeaveType.objects.create(tenant=tenant, name="Annual")
    hr.LeaveRequest.objects.create(
        tenant=tenant, user=alice, leave_type=annual,
        from_date=date(2024, 1, 10), to_date=date(2024, 1, 12),
        total_days=Decimal("3"), status=LeaveStatus.APPROVED, approver=owner,
    )
    hr.LeaveRequest.objects.create(
        tenant=tenant, user=alice, leave_type=annual,
        from_date=date(2024, 2, 1), to_date=date(2024, 2, 1),
        total_days=Decimal("1"),
    )

    return {
        "engineering": engineering,
        "sales": sales,
        "alice": alice,
        "bob": bob,
        "dana": dana,
        "foreigner": foreigner,
    }

"""
Integration tests for the report template lifecycle.
"""

import pytest

from hrms.audit.models import AuditLogEntry
from hrms.reporting.models import ReportTemplate
from hrms.reporting.services import (
    create_template,
    delete_template,
    duplicate_template,
    get_template,
    list_templates,
    update_template,
)
from hrms.reporting.types import (
    AccessDenied,
    DuplicateTemplateName,
    InvalidField,
    InvalidOperator,
    InvalidReportSpec,
    SystemTemplateImmutable,
    TemplateNotFound,
    UnknownDataSource,
)

pytestmark = [pytest.mark.integration, pytest.mark.django_db]


def _payload(**overrides):
    payload = {
        "name": "Headcount",
        "dataSource": "EMPLOYEES",
        "selectedFields": ["firstName", "department.name"],
    }
    payload.update(overrides)
    return payload


def test_create_applies_defaults_and_audits(actor, owner):
    created = create_template(actor, _payload(description="<b>All</b> staff"))

    assert created["name"] == "Headcount"
    assert created["description"] == "All staff"
    assert created["chartType"] == "TABLE"
    assert created["chartConfig"] == {}
    assert created["filters"] == []
    assert created["isPublic"] is False
    assert created["isSystem"] is False
    assert created["createdBy"]["id"] == owner.pk

    entry = AuditLogEntry.objects.get()
    assert entry.action == "CREATE"
    assert entry.entity == "REPORT_TEMPLATE"
    assert entry.entity_id == str(created["id"])
    assert entry.tenant_id == str(actor.tenant_id)
    assert entry.entity_name == "Headcount"


def test_create_stores_normalized_definition(actor):
    created = create_template(
        actor,
        _payload(
            sortBy=["firstName"],
            aggregations=[{"field": "id", "type": "count"}],
            chartType="bar",
        ),
    )
    template = ReportTemplate.objects.get(pk=created["id"])
    assert template.sort_by == [{"field": "firstName", "direction": "asc"}]
    assert template.aggregations == [{"field": "id", "type": "COUNT"}]
    assert template.chart_type == "BAR"


@pytest.mark.parametrize(
    "overrides,error",
    [
        ({"dataSource": "SALARIES"}, UnknownDataSource),
        ({"selectedFields": ["salary"]}, InvalidField),
        ({"selectedFields": []}, InvalidReportSpec),
        ({"name": "   "}, InvalidReportSpec),
        ({"chartType": "RADAR"}, InvalidReportSpec),
        (
            {"filters": [{"field": "firstName", "operator": "gt", "value": "A"}]},
            InvalidOperator,
        ),
    ],
)
def test_create_validates_definition(actor, overrides, error):
    with pytest.raises(error):
        create_template(actor, _payload(**overrides))
    assert not ReportTemplate.objects.exists()


def test_names_are_unique_per_tenant(actor, colleague_actor, outsider_actor):
    create_template(actor, _payload())
    with pytest.raises(DuplicateTemplateName) as excinfo:
        create_template(colleague_actor, _payload())
    assert excinfo.value.status_code == 409
    # same name is fine in another tenant
    create_template(outsider_actor, _payload())


def test_list_shows_own_and_public_templates(actor, colleague_actor, outsider_actor):
    create_template(actor, _payload(name="Mine"))
    create_template(colleague_actor, _payload(name="Shared", isPublic=True))
    create_template(colleague_actor, _payload(name="Private"))
    create_template(outsider_actor, _payload(name="Foreign", isPublic=True))

    listing = list_templates(actor)
    assert [t["name"] for t in listing["templates"]] == ["Shared", "Mine"]
    assert listing["total"] == 2
    assert listing["page"] == 1
    assert listing["totalPages"] == 1
    assert listing["templates"][0]["generatedReportCount"] == 0


def test_list_filters_and_paginates(actor):
    create_template(actor, _payload(name="People"))
    create_template(actor, _payload(name="Pay", dataSource="PAYROLL", selectedFields=["netSalary"]))
    create_template(actor, _payload(name="Pay 2", dataSource="PAYROLL", selectedFields=["netSalary"]))

    payroll = list_templates(actor, {"dataSource": "PAYROLL", "limit": 1, "page": 2})
    assert payroll["total"] == 2
    assert payroll["totalPages"] == 2
    assert [t["name"] for t in payroll["templates"]] == ["Pay"]

    with pytest.raises(InvalidReportSpec):
        list_templates(actor, {"dataSource": "NOPE"})


def test_private_template_of_colleague_is_not_found(actor, colleague_actor):
    private = create_template(colleague_actor, _payload(name="Private"))
    with pytest.raises(TemplateNotFound):
        get_template(actor, private["id"])
    with pytest.raises(TemplateNotFound):
        update_template(actor, private["id"], {"name": "Hijack"})
    with pytest.raises(TemplateNotFound):
        delete_template(actor, private["id"])


def test_public_template_of_colleague_is_read_only(actor, colleague_actor):
    shared = create_template(colleague_actor, _payload(name="Shared", isPublic=True))
    assert get_template(actor, shared["id"])["generatedReports"] == []
    with pytest.raises(AccessDenied):
        update_template(actor, shared["id"], {"description": "mine now"})
    with pytest.raises(AccessDenied):
        delete_template(actor, shared["id"])


def test_templates_of_other_tenants_are_not_found(actor, outsider_actor):
    foreign = create_template(outsider_actor, _payload(isPublic=True))
    with pytest.raises(TemplateNotFound):
        get_template(actor, foreign["id"])
    with pytest.raises(TemplateNotFound):
        get_template(actor, "not-a-number")


def test_system_templates_are_immutable_even_for_owner(actor, tenant, owner):
    template = ReportTemplate.objects.create(
        tenant=tenant,
        name="Standard headcount",
        data_source="EMPLOYEES",
        selected_fields=["firstName"],
        is_system=True,
        created_by=owner,
    )
    with pytest.raises(SystemTemplateImmutable):
        update_template(actor, template.pk, {"name": "Custom"})
    with pytest.raises(SystemTemplateImmutable):
        delete_template(actor, template.pk)


def test_system_check_comes_before_ownership(colleague_actor, tenant, owner):
    template = ReportTemplate.objects.create(
        tenant=tenant,
        name="System private",
        data_source="EMPLOYEES",
        selected_fields=["firstName"],
        is_system=True,
        created_by=owner,
    )
    with pytest.raises(SystemTemplateImmutable):
        delete_template(colleague_actor, template.pk)


def test_update_changes_only_given_keys_and_audits_diff(actor):
    created = create_template(actor, _payload(description="v1"))
    updated = update_template(
        actor,
        created["id"],
        {
            "name": "Headcount v2",
            "filters": [{"field": "status", "operator": "equals", "value": "ACTIVE"}],
        },
    )
    assert updated["name"] == "Headcount v2"
    assert updated["description"] == "v1"
    assert updated["selectedFields"] == ["firstName", "department.name"]
    assert updated["filters"] == [{"field": "status", "operator": "equals", "value": "ACTIVE"}]

    entry = AuditLogEntry.objects.get(action="UPDATE")
    assert entry.changes["name"] == {"from": "Headcount", "to": "Headcount v2"}
    assert "description" not in entry.changes


def test_update_revalidates_definition(actor):
    created = create_template(actor, _payload())
    with pytest.raises(InvalidField):
        update_template(actor, created["id"], {"selectedFields": ["netSalary"]})
    with pytest.raises(InvalidReportSpec):
        update_template(actor, created["id"], {"dataSource": "PAYROLL"})
    # repeating the current data source is allowed
    update_template(actor, created["id"], {"dataSource": "EMPLOYEES", "isPublic": True})
    assert ReportTemplate.objects.get(pk=created["id"]).is_public is True


def test_rename_to_existing_name_conflicts(actor):
    create_template(actor, _payload(name="Taken"))
    created = create_template(actor, _payload(name="Other"))
    with pytest.raises(DuplicateTemplateName):
        update_template(actor, created["id"], {"name": "Taken"})
    # keeping its own name is not a conflict
    update_template(actor, created["id"], {"name": "Other"})


def test_delete_removes_template_and_audits(actor):
    created = create_template(actor, _payload())
    result = delete_template(actor, created["id"])
    assert result == {"id": created["id"], "deleted": True}
    assert not ReportTemplate.objects.exists()
    entry = AuditLogEntry.objects.get(action="DELETE")
    assert entry.entity_id == str(created["id"])
    assert entry.old_value["name"] == "Headcount"


def test_duplicate_creates_private_copy_for_caller(actor, colleague_actor, colleague):
    shared = create_template(actor, _payload(name="Shared", isPublic=True, chartType="PIE"))

    copy = duplicate_template(colleague_actor, shared["id"])
    assert copy["name"] == "Shared (Copy)"
    assert copy["isPublic"] is False
    assert copy["isSystem"] is False
    assert copy["chartType"] == "PIE"
    assert copy["selectedFields"] == shared["selectedFields"]
    assert copy["createdBy"]["id"] == colleague.pk

    entry = AuditLogEntry.objects.filter(action="CREATE").get(entity_id=str(copy["id"]))
    assert entry.new_value["duplicatedFrom"] == shared["id"]

    named = duplicate_template(colleague_actor, shared["id"], {"name": "My version"})
    assert named["name"] == "My version"

    with pytest.raises(DuplicateTemplateName):
        duplicate_template(colleague_actor, shared["id"])


def test_duplicate_of_hidden_template_is_not_found(actor, colleague_actor):
    private = create_template(actor, _payload(name="Private"))
    with pytest.raises(TemplateNotFound):
        duplicate_template(colleague_actor, private["id"])

"""
Integration tests for the report builder GraphQL schema.
"""

import json

import pytest
from django.contrib.auth.models import AnonymousUser
from django.test import Client

from hrms.reporting.schema import schema

pytestmark = [pytest.mark.integration, pytest.mark.django_db]

PREVIEW = """
mutation Preview($definition: GenericScalar!) {
  previewReport(definition: $definition) { result }
}
"""

CREATE = """
mutation Create($input: GenericScalar!) {
  createReportTemplate(input: $input) { template }
}
"""

RUN = """
mutation Run($id: ID!, $parameters: GenericScalar) {
  runReportTemplate(id: $id, parameters: $parameters) { report }
}
"""


def _execute(rf, user, query, variables=None):
    request = rf.post("/graphql/")
    request.user = user
    return schema.execute(query, context_value=request, variable_values=variables or {})


def test_preview_mutation(rf, owner, hr_data):
    result = _execute(
        rf,
        owner.account,
        PREVIEW,
        {"definition": {"dataSource": "EMPLOYEES", "selectedFields": ["firstName"]}},
    )
    assert result.errors is None
    payload = result.data["previewReport"]["result"]
    assert payload["preview"] is True
    assert payload["rowCount"] == 3


def test_errors_carry_codes(rf, owner):
    result = _execute(
        rf,
        owner.account,
        PREVIEW,
        {"definition": {"dataSource": "EMPLOYEES", "selectedFields": ["salary"]}},
    )
    assert result.errors[0].message == "Invalid field: salary"
    assert result.errors[0].extensions["code"] == "INVALID_FIELD"


def test_anonymous_caller_is_rejected(rf):
    result = _execute(rf, AnonymousUser(), "{ reportBuilderStats }")
    assert result.errors[0].extensions["code"] == "AUTHENTICATION_REQUIRED"


def test_create_run_and_fetch_round_trip(rf, owner, hr_data):
    created = _execute(
        rf,
        owner.account,
        CREATE,
        {
            "input": {
                "name": "Payroll",
                "dataSource": "PAYROLL",
                "selectedFields": ["month", "netSalary"],
                "aggregations": [{"field": "netSalary", "type": "MAX"}],
            }
        },
    )
    assert created.errors is None
    template_id = created.data["createReportTemplate"]["template"]["id"]

    run = _execute(rf, owner.account, RUN, {"id": template_id, "parameters": {}})
    assert run.errors is None
    report = run.data["runReportTemplate"]["report"]
    assert report["rowCount"] == 2
    assert report["summary"] == {"netSalary_MAX": 4300.0}

    history = _execute(rf, owner.account, "{ generatedReports }")
    assert history.data["generatedReports"]["total"] == 1

    detail = _execute(
        rf, owner.account, "query($id: ID!) { reportTemplate(id: $id) }", {"id": template_id}
    )
    assert detail.data["reportTemplate"]["generatedReports"][0]["id"] == report["id"]


def test_catalog_queries(rf, owner):
    sources = _execute(rf, owner.account, "{ reportDataSources }")
    assert len(sources.data["reportDataSources"]) == 10

    fields = _execute(rf, owner.account, '{ reportFields(dataSource: "TRAINING") }')
    assert fields.data["reportFields"]["dataSource"] == "TRAINING"


def test_delete_and_duplicate_mutations(rf, owner, colleague):
    created = _execute(
        rf,
        owner.account,
        CREATE,
        {
            "input": {
                "name": "Shared",
                "dataSource": "ASSETS",
                "selectedFields": ["name"],
                "isPublic": True,
            }
        },
    )
    template_id = created.data["createReportTemplate"]["template"]["id"]

    copy = _execute(
        rf,
        colleague.account,
        "mutation($id: ID!) { duplicateReportTemplate(id: $id) { template } }",
        {"id": template_id},
    )
    assert copy.data["duplicateReportTemplate"]["template"]["name"] == "Shared (Copy)"

    denied = _execute(
        rf,
        colleague.account,
        "mutation($id: ID!) { deleteReportTemplate(id: $id) { ok } }",
        {"id": template_id},
    )
    assert denied.errors[0].extensions["code"] == "ACCESS_DENIED"

    deleted = _execute(
        rf,
        owner.account,
        "mutation($id: ID!) { deleteReportTemplate(id: $id) { ok id } }",
        {"id": template_id},
    )
    assert deleted.data["deleteReportTemplate"] == {"ok": True, "id": str(template_id)}


def test_graphql_endpoint_is_mounted(owner, hr_data):
    client = Client()
    client.force_login(owner.account)
    response = client.post(
        "/graphql/",
        data=json.dumps({"query": "{ reportBuilderStats }"}),
        content_type="application/json",
    )
    assert response.status_code == 200
    body = json.loads(response.content)
    assert body["data"]["reportBuilderStats"]["totalTemplates"] == 0

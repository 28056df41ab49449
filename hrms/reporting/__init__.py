"""
Custom report builder.

Tenant users pick a data source, select fields, add filters, sorting and
aggregations, then preview the result or save it as a template that can be
run on demand. Runs are stored as generated reports.

Usage:
    from hrms.reporting.engine import ReportEngine

    ReportEngine(tenant_id).preview({
        "dataSource": "EMPLOYEES",
        "selectedFields": ["firstName", "department.name"],
    })

Models and services are imported from their submodules so this package stays
importable before the app registry is ready.
"""

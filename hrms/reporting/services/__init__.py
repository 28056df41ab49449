"""
Service layer for the report builder.

Views and the GraphQL schema call these functions with a resolved
``ReportingActor``; they raise ``ReportingError`` subclasses and return plain
JSON-ready payloads.
"""

from .access import ReportingActor, resolve_actor
from .generated import delete_generated_report, get_generated_report, list_generated_reports
from .runs import preview_report, run_template
from .stats import builder_stats
from .templates import (
    create_template,
    delete_template,
    duplicate_template,
    get_template,
    list_templates,
    update_template,
)

__all__ = [
    "ReportingActor",
    "resolve_actor",
    "builder_stats",
    "preview_report",
    "run_template",
    "list_templates",
    "get_template",
    "create_template",
    "update_template",
    "delete_template",
    "duplicate_template",
    "list_generated_reports",
    "get_generated_report",
    "delete_generated_report",
]

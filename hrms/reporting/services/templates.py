"""
Report template lifecycle: list, retrieve, create, update, delete, duplicate.

Every lookup is scoped to the actor's tenant. Mutations go through
``_editable_template`` so the system/ownership/visibility checks run in one
order everywhere, and every mutation is audited.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from django.db import IntegrityError, transaction
from django.db.models import Count
from django.http import HttpRequest

from ...audit.logger import record_audit_event
from ...audit.models import AuditAction
from ...config_proxy import get_setting
from ...utils.coercion import coerce_bool, coerce_int
from ...utils.sanitization import clean_text
from ..compiler import compile_report, normalize_report_spec
from ..filters import ReportTemplateFilterSet
from ..models import ReportTemplate
from ..registry import parse_data_source
from ..serializers import serialize_template
from ..types import (
    AccessDenied,
    ChartType,
    DuplicateTemplateName,
    InvalidReportSpec,
    ReportSpec,
    SystemTemplateImmutable,
    TemplateNotFound,
)
from .access import ReportingActor
from .pagination import paginate

logger = logging.getLogger(__name__)

AUDIT_ENTITY = "REPORT_TEMPLATE"
NAME_MAX_LENGTH = 200
DEFINITION_KEYS = ("selectedFields", "filters", "groupBy", "sortBy", "aggregations")


# --------------------------------------------------------------------------- #
# Lookups
# --------------------------------------------------------------------------- #


def _fetch(actor: ReportingActor, template_id: Any) -> ReportTemplate:
    try:
        return ReportTemplate.objects.select_related("created_by").get(
            pk=template_id, tenant_id=actor.tenant_id
        )
    except (ReportTemplate.DoesNotExist, ValueError, TypeError):
        raise TemplateNotFound(details={"id": template_id}) from None


def get_visible_template(actor: ReportingActor, template_id: Any) -> ReportTemplate:
    """A template the actor may read; private templates of others are hidden."""
    template = _fetch(actor, template_id)
    if not template.is_visible_to(actor.user_id):
        raise TemplateNotFound(details={"id": template_id})
    return template


def _editable_template(actor: ReportingActor, template_id: Any) -> ReportTemplate:
    template = _fetch(actor, template_id)
    if template.is_system:
        raise SystemTemplateImmutable(details={"id": template.pk})
    if not template.is_owned_by(actor.user_id):
        if not template.is_visible_to(actor.user_id):
            raise TemplateNotFound(details={"id": template_id})
        raise AccessDenied(
            "Only the template owner can modify it", details={"id": template.pk}
        )
    return template


# --------------------------------------------------------------------------- #
# Payload handling
# --------------------------------------------------------------------------- #


def _clean_name(raw: Any) -> str:
    name = clean_text(raw, max_length=NAME_MAX_LENGTH)
    if not name:
        raise InvalidReportSpec("Template name is required", details={"field": "name"})
    return name


def _ensure_unique_name(actor: ReportingActor, name: str, exclude_id: Any = None) -> None:
    clash = ReportTemplate.objects.for_tenant(actor.tenant_id).filter(name=name)
    if exclude_id is not None:
        clash = clash.exclude(pk=exclude_id)
    if clash.exists():
        raise DuplicateTemplateName(details={"name": name})


def _chart_type(raw: Any) -> str:
    if raw in (None, ""):
        return ChartType.TABLE
    value = str(raw).upper()
    if value not in ChartType.values:
        raise InvalidReportSpec(
            f"Invalid chart type: {raw}",
            details={"chartType": raw, "allowed": list(ChartType.values)},
        )
    return value


def _optional_object(payload: Mapping[str, Any], key: str) -> Optional[dict]:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, Mapping):
        raise InvalidReportSpec(f"{key} must be an object", details={"field": key})
    return dict(value)


def _validated_definition(definition: Mapping[str, Any]) -> ReportSpec:
    """Check a definition against the registry without touching the database."""
    spec = normalize_report_spec(definition)
    compile_report(spec)
    return spec


def _definition_fields(spec: ReportSpec) -> dict[str, Any]:
    return {
        "data_source": spec.data_source.value,
        "selected_fields": list(spec.selected_fields),
        "filters": [f.as_dict() for f in spec.filters],
        "group_by": list(spec.group_by),
        "sort_by": [s.as_dict() for s in spec.sort_by],
        "aggregations": [a.as_dict() for a in spec.aggregations],
    }


def _save(template: ReportTemplate) -> None:
    try:
        with transaction.atomic():
            template.save()
    except IntegrityError:
        raise DuplicateTemplateName(details={"name": template.name}) from None


def _audit(
    actor: ReportingActor,
    action: AuditAction,
    template: ReportTemplate,
    *,
    old_value: Optional[dict] = None,
    new_value: Optional[dict] = None,
    request: Optional[HttpRequest] = None,
) -> None:
    record_audit_event(
        action=action,
        entity=AUDIT_ENTITY,
        entity_id=template.pk,
        tenant_id=actor.tenant_id,
        user_id=actor.user_id,
        old_value=old_value,
        new_value=new_value,
        request=request,
    )


# --------------------------------------------------------------------------- #
# Operations
# --------------------------------------------------------------------------- #


def list_templates(
    actor: ReportingActor, params: Optional[Mapping[str, Any]] = None
) -> dict[str, Any]:
    """Visible templates, most recently updated first, one page at a time."""
    params = params or {}
    queryset = (
        ReportTemplate.objects.visible_to(actor.tenant_id, actor.user_id)
        .select_related("created_by")
        .annotate(generated_report_count=Count("generated_reports"))
        .order_by("-updated_at", "-id")
    )
    filterset = ReportTemplateFilterSet(data=params, queryset=queryset)
    if not filterset.is_valid():
        raise InvalidReportSpec(
            "Invalid template filters", details=dict(filterset.errors.get_json_data())
        )
    templates, page = paginate(filterset.qs, params.get("page"), params.get("limit"))
    return {"templates": [serialize_template(t) for t in templates], **page}


def get_template(actor: ReportingActor, template_id: Any) -> dict[str, Any]:
    template = get_visible_template(actor, template_id)
    recent = coerce_int(get_setting("reporting.recent_runs", 5), 5, minimum=0)
    runs = template.generated_reports.select_related("generated_by", "template")[:recent]
    return serialize_template(template, recent_runs=runs)


def create_template(
    actor: ReportingActor,
    payload: Mapping[str, Any],
    request: Optional[HttpRequest] = None,
) -> dict[str, Any]:
    if not isinstance(payload, Mapping):
        raise InvalidReportSpec("Template payload must be an object")
    name = _clean_name(payload.get("name"))
    spec = _validated_definition(payload)
    _ensure_unique_name(actor, name)

    template = ReportTemplate(
        tenant_id=actor.tenant_id,
        name=name,
        description=clean_text(payload.get("description")) or "",
        chart_type=_chart_type(payload.get("chartType")),
        chart_config=_optional_object(payload, "chartConfig") or {},
        is_public=coerce_bool(payload.get("isPublic"), False),
        schedule=_optional_object(payload, "schedule"),
        created_by_id=actor.user_id,
        **_definition_fields(spec),
    )
    _save(template)

    created = serialize_template(template)
    _audit(actor, AuditAction.CREATE, template, new_value=created, request=request)
    logger.info(
        "Report template %s created in tenant %s by %s",
        template.pk,
        actor.tenant_id,
        actor.user_id,
    )
    return created


def update_template(
    actor: ReportingActor,
    template_id: Any,
    payload: Mapping[str, Any],
    request: Optional[HttpRequest] = None,
) -> dict[str, Any]:
    """
    Apply a partial update. Only keys present in ``payload`` change.

    The data source is fixed at creation; a changed definition is validated
    again before it is stored.
    """
    if not isinstance(payload, Mapping):
        raise InvalidReportSpec("Template payload must be an object")
    template = _editable_template(actor, template_id)
    before = serialize_template(template)

    if payload.get("dataSource") not in (None, ""):
        requested = parse_data_source(payload["dataSource"])
        if requested.value != template.data_source:
            raise InvalidReportSpec(
                "The data source of a template cannot be changed",
                details={"dataSource": payload["dataSource"]},
            )

    if "name" in payload:
        name = _clean_name(payload["name"])
        if name != template.name:
            _ensure_unique_name(actor, name, exclude_id=template.pk)
        template.name = name
    if "description" in payload:
        template.description = clean_text(payload["description"]) or ""
    if "chartType" in payload:
        template.chart_type = _chart_type(payload["chartType"])
    if "chartConfig" in payload:
        template.chart_config = _optional_object(payload, "chartConfig")
    if "isPublic" in payload:
        template.is_public = coerce_bool(payload["isPublic"], template.is_public)
    if "schedule" in payload:
        template.schedule = _optional_object(payload, "schedule")

    if any(key in payload for key in DEFINITION_KEYS):
        definition = template.definition()
        definition.update({key: payload[key] for key in DEFINITION_KEYS if key in payload})
        for attr, value in _definition_fields(_validated_definition(definition)).items():
            setattr(template, attr, value)

    _save(template)

    after = serialize_template(template)
    _audit(
        actor,
        AuditAction.UPDATE,
        template,
        old_value=before,
        new_value=after,
        request=request,
    )
    return after


def delete_template(
    actor: ReportingActor, template_id: Any, request: Optional[HttpRequest] = None
) -> dict[str, Any]:
    template = _editable_template(actor, template_id)
    snapshot = serialize_template(template)
    template_pk = template.pk
    template.delete()
    # delete() clears the primary key
    template.pk = template_pk
    _audit(actor, AuditAction.DELETE, template, old_value=snapshot, request=request)
    logger.info("Report template %s deleted from tenant %s", template_pk, actor.tenant_id)
    return {"id": template_pk, "deleted": True}


def duplicate_template(
    actor: ReportingActor,
    template_id: Any,
    payload: Optional[Mapping[str, Any]] = None,
    request: Optional[HttpRequest] = None,
) -> dict[str, Any]:
    """Copy a visible template into a private one owned by the actor."""
    payload = payload or {}
    source = get_visible_template(actor, template_id)
    if payload.get("name") not in (None, ""):
        name = _clean_name(payload["name"])
    else:
        name = _clean_name(f"{source.name} (Copy)")
    _ensure_unique_name(actor, name)

    copy = ReportTemplate(
        tenant_id=actor.tenant_id,
        name=name,
        description=source.description,
        data_source=source.data_source,
        selected_fields=list(source.selected_fields or []),
        filters=list(source.filters or []),
        group_by=list(source.group_by or []),
        sort_by=list(source.sort_by or []),
        aggregations=list(source.aggregations or []),
        chart_type=source.chart_type,
        chart_config=source.chart_config,
        is_public=False,
        is_system=False,
        schedule=source.schedule,
        created_by_id=actor.user_id,
    )
    _save(copy)

    created = serialize_template(copy)
    _audit(
        actor,
        AuditAction.CREATE,
        copy,
        new_value={**created, "duplicatedFrom": source.pk},
        request=request,
    )
    return created


__all__ = [
    "AUDIT_ENTITY",
    "get_visible_template",
    "list_templates",
    "get_template",
    "create_template",
    "update_template",
    "delete_template",
    "duplicate_template",
]

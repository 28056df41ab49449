"""
Tenant resolution logic.

The tenant a request *claims* (JWT claim or header) is only a hint. The tenant
that scopes every query is the one on the caller's employee profile; the hint
is compared against it by the access layer.
"""

from typing import Any, Optional

from django.db import models

from .settings import get_multitenancy_settings

_TENANT_CACHE_ATTR = "_hrms_tenant_hint"
_MISSING = object()


def _normalize_header_key(header_name: str) -> str:
    name = header_name.upper().replace("-", "_")
    if name not in {"CONTENT_TYPE", "CONTENT_LENGTH"} and not name.startswith("HTTP_"):
        name = f"HTTP_{name}"
    return name


def _get_header_value(request: Any, header_name: str) -> Optional[str]:
    if not header_name:
        return None
    headers = getattr(request, "headers", None)
    if headers:
        value = headers.get(header_name)
        if value:
            return str(value).strip() or None
    meta = getattr(request, "META", None)
    if isinstance(meta, dict):
        value = meta.get(_normalize_header_key(header_name))
        if value:
            return str(value).strip() or None
    return None


def _get_existing_tenant_value(request: Any) -> Optional[Any]:
    existing = getattr(request, "tenant_id", None)
    if existing not in (None, ""):
        return existing
    existing = getattr(request, "tenant", None)
    if existing not in (None, ""):
        if isinstance(existing, models.Model):
            return existing.pk
        return existing
    return None


def resolve_tenant_hint(request: Any) -> Optional[str]:
    """
    Return the tenant identifier the request claims, or None.

    Lookup order: a tenant already attached to the request, the JWT claim,
    then the tenant header. The result is cached on the request.
    """
    if request is None:
        return None
    cached = getattr(request, _TENANT_CACHE_ATTR, _MISSING)
    if cached is not _MISSING:
        return cached

    settings = get_multitenancy_settings()
    tenant_id = _get_existing_tenant_value(request)

    if tenant_id is None and settings.tenant_claim:
        payload = getattr(request, "jwt_payload", None)
        if isinstance(payload, dict):
            tenant_id = payload.get(settings.tenant_claim)

    if tenant_id is None and settings.tenant_header:
        tenant_id = _get_header_value(request, settings.tenant_header)

    if tenant_id is not None:
        tenant_id = str(tenant_id)
    setattr(request, _TENANT_CACHE_ATTR, tenant_id)
    return tenant_id


__all__ = ["resolve_tenant_hint"]

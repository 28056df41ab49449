"""
Caller identity for the report builder.

The acting tenant always comes from the caller's employee profile. A tenant
claimed by the request (JWT claim or header) must match it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from django.core.exceptions import ObjectDoesNotExist
from django.http import HttpRequest

from ...auth.utils import resolve_request_user
from ...multitenancy.resolver import resolve_tenant_hint
from ..types import AccessDenied, AuthenticationRequired

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReportingActor:
    tenant_id: Any
    user_id: Any
    role: str

    @classmethod
    def for_employee(cls, employee) -> "ReportingActor":
        return cls(tenant_id=employee.tenant_id, user_id=employee.pk, role=employee.role)


def _employee_for(user) -> Optional[Any]:
    try:
        return user.employee_profile
    except ObjectDoesNotExist:
        return None


def resolve_actor(request: HttpRequest) -> ReportingActor:
    """
    Resolve ``(tenant, employee, role)`` for the request.

    Raises ``AuthenticationRequired`` for anonymous callers and
    ``AccessDenied`` when the caller has no active employee profile or claims
    another tenant.
    """
    user = resolve_request_user(request)
    if user is None or not getattr(user, "is_authenticated", False):
        raise AuthenticationRequired()

    employee = _employee_for(user)
    if employee is None:
        raise AccessDenied("No employee profile for this account")
    if not employee.is_active:
        raise AccessDenied("Employee profile is inactive")
    if not employee.tenant.is_active:
        raise AccessDenied("Tenant is inactive")

    hint = resolve_tenant_hint(request)
    if hint is not None and hint not in (str(employee.tenant_id), employee.tenant.slug):
        logger.warning(
            "Tenant mismatch for user %s: claimed %s, profile %s",
            user.pk,
            hint,
            employee.tenant_id,
        )
        raise AccessDenied("Tenant access denied")

    return ReportingActor.for_employee(employee)


__all__ = ["ReportingActor", "resolve_actor"]

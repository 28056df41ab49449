"""
Row-level multitenancy: tenant model, tenant-scoped base model and the
request tenant hint resolver.
"""

from .resolver import resolve_tenant_hint
from .settings import MultitenancySettings, get_multitenancy_settings

__all__ = [
    "MultitenancySettings",
    "get_multitenancy_settings",
    "resolve_tenant_hint",
]

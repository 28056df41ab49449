"""
Multitenancy settings.
"""

from dataclasses import dataclass
from typing import Any

from ..config_proxy import get_setting


@dataclass(frozen=True)
class MultitenancySettings:
    tenant_header: str
    tenant_claim: str


def _coerce_str(value: Any, default: str) -> str:
    if value is None:
        return default
    value = str(value).strip()
    return value or default


def get_multitenancy_settings() -> MultitenancySettings:
    tenant_header = _coerce_str(
        get_setting("multitenancy.tenant_header", "X-Tenant-ID"), "X-Tenant-ID"
    )
    tenant_claim = _coerce_str(
        get_setting("multitenancy.tenant_claim", "tenant_id"), "tenant_id"
    )
    return MultitenancySettings(
        tenant_header=tenant_header,
        tenant_claim=tenant_claim,
    )

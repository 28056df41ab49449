"""
Default configuration for the hrms application.

Single source of truth for every setting the application consumes. Projects
override any key through ``settings.HRMS_SETTINGS`` using the same nesting.
"""

from __future__ import annotations

from typing import Any

# --------------------------------------------------------------------------- #
# Library-wide defaults (grouped by feature area)
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "reporting": {
        # Hard ceilings: configured values above these are clamped.
        "preview_row_limit": 10,
        "run_row_limit": 1000,
        "report_expiry_days": 30,
        "recent_runs": 5,
        "default_page_size": 20,
        "max_page_size": 100,
    },
    "multitenancy": {
        "tenant_header": "X-Tenant-ID",
        "tenant_claim": "tenant_id",
    },
    "audit": {
        "enabled": True,
        "sensitive_fields": [
            "password",
            "plain_password",
            "token",
            "refresh_token",
            "secret",
        ],
    },
    "observability": {
        "sentry_enabled": False,
    },
}

PREVIEW_ROW_CEILING = 10
RUN_ROW_CEILING = 1000


__all__ = [
    "LIBRARY_DEFAULTS",
    "PREVIEW_ROW_CEILING",
    "RUN_ROW_CEILING",
]

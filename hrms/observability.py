"""
Observability hooks (Sentry) for the report builder.

Sentry is only initialized when ``observability.sentry_enabled`` is set and a
DSN is available (``observability.sentry_dsn`` or ``SENTRY_DSN``).
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import sentry_sdk
from sentry_sdk.integrations.django import DjangoIntegration

from .config_proxy import get_setting

logger = logging.getLogger(__name__)

_initialized = False


def sentry_enabled() -> bool:
    return bool(get_setting("observability.sentry_enabled", False))


def setup_sentry() -> bool:
    """Initialize the Sentry SDK once. Returns True when Sentry is active."""
    global _initialized
    if _initialized:
        return True
    if not sentry_enabled():
        return False

    dsn = get_setting("observability.sentry_dsn") or os.environ.get("SENTRY_DSN")
    if not dsn:
        logger.warning("Sentry enabled but no DSN configured; skipping")
        return False

    sentry_sdk.init(
        dsn=dsn,
        integrations=[DjangoIntegration()],
        environment=get_setting("observability.environment", "production"),
        send_default_pii=False,
    )
    _initialized = True
    logger.info("Sentry error capture enabled")
    return True


def capture_exception(
    error: BaseException, *, tags: Optional[dict[str, Any]] = None
) -> None:
    """Forward an unexpected error to Sentry when it is enabled."""
    if not sentry_enabled():
        return
    with sentry_sdk.new_scope() as scope:
        for key, value in (tags or {}).items():
            scope.set_tag(key, value)
        sentry_sdk.capture_exception(error)


__all__ = ["sentry_enabled", "setup_sentry", "capture_exception"]

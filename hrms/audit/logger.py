"""
Audit logger for report builder mutations.

Audit writes never interrupt the operation being audited: failures are logged
and swallowed here, and nowhere else.
"""

import logging
from typing import Any, Optional

from django.http import HttpRequest

from ..config_proxy import get_setting
from ..utils.serialization import json_sanitize
from .models import AuditAction, AuditLogEntry

logger = logging.getLogger(__name__)

REDACTION_MASK = "[REDACTED]"


def _normalize_key(key: Any) -> str:
    return str(key).replace("_", "").lower()


class AuditLogger:
    """Persist audit entries with sensitive keys redacted."""

    def __init__(self):
        self.enabled = bool(get_setting("audit.enabled", True))
        fields = get_setting("audit.sensitive_fields", []) or []
        if isinstance(fields, str):
            fields = [f.strip() for f in fields.split(",") if f.strip()]
        self.redaction_fields = {_normalize_key(f) for f in fields if f}

    def _redact_payload(self, payload: Any) -> Any:
        if isinstance(payload, dict):
            redacted: dict[str, Any] = {}
            for key, value in payload.items():
                if _normalize_key(key) in self.redaction_fields:
                    redacted[key] = REDACTION_MASK
                else:
                    redacted[key] = self._redact_payload(value)
            return redacted
        if isinstance(payload, list):
            return [self._redact_payload(item) for item in payload]
        return payload

    def calculate_changes(
        self, old_value: Optional[dict], new_value: Optional[dict]
    ) -> Optional[dict[str, dict[str, Any]]]:
        """Per-key ``{"from", "to"}`` diff, or None when nothing changed."""
        if not old_value or not new_value:
            return None
        changes = {}
        for key in sorted(set(old_value) | set(new_value)):
            if _normalize_key(key) in self.redaction_fields:
                continue
            before = old_value.get(key)
            after = new_value.get(key)
            if before == after:
                continue
            changes[key] = {"from": before, "to": after}
        return changes or None

    def log(
        self,
        *,
        action: str,
        entity: str,
        entity_id: Any = None,
        tenant_id: Any = None,
        user_id: Any = None,
        old_value: Optional[dict] = None,
        new_value: Optional[dict] = None,
        request: Optional[HttpRequest] = None,
    ) -> Optional[AuditLogEntry]:
        if not self.enabled:
            return None
        try:
            old_clean = self._redact_payload(json_sanitize(old_value))
            new_clean = self._redact_payload(json_sanitize(new_value))
            source = new_clean or old_clean or {}
            entity_name = source.get("name") or source.get("title")
            return AuditLogEntry.objects.create(
                tenant_id=str(tenant_id) if tenant_id is not None else None,
                user_id=str(user_id) if user_id is not None else None,
                action=AuditAction(action),
                entity=entity,
                entity_id=str(entity_id) if entity_id is not None else None,
                entity_name=str(entity_name)[:255] if entity_name else None,
                old_value=old_clean,
                new_value=new_clean,
                changes=self.calculate_changes(old_clean, new_clean),
                client_ip=self._get_client_ip(request),
                user_agent=(
                    request.META.get("HTTP_USER_AGENT") if request is not None else None
                ),
            )
        except Exception as exc:
            logger.error("Failed to record audit entry for %s: %s", entity, exc)
            return None

    def _get_client_ip(self, request: Optional[HttpRequest]) -> Optional[str]:
        if request is None:
            return None
        forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
        if forwarded:
            return forwarded.split(",")[0].strip() or None
        return request.META.get("REMOTE_ADDR") or None


def record_audit_event(**kwargs: Any) -> Optional[AuditLogEntry]:
    """Record one audit entry using the current audit settings."""
    return AuditLogger().log(**kwargs)


__all__ = ["AuditLogger", "record_audit_event", "REDACTION_MASK"]

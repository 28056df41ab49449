"""
Unit tests for audit payload redaction and change calculation.
"""

from unittest.mock import patch

import pytest
from django.test import override_settings

from hrms.audit.logger import REDACTION_MASK, AuditLogger

pytestmark = pytest.mark.unit


def test_sensitive_keys_are_redacted_recursively():
    audit = AuditLogger()
    payload = audit._redact_payload(
        {"name": "Payroll", "refreshToken": "abc", "nested": [{"PASSWORD": "x", "ok": 1}]}
    )
    assert payload["name"] == "Payroll"
    assert payload["refreshToken"] == REDACTION_MASK
    assert payload["nested"][0] == {"PASSWORD": REDACTION_MASK, "ok": 1}


def test_calculate_changes_lists_changed_keys_only():
    audit = AuditLogger()
    changes = audit.calculate_changes(
        {"name": "Old", "isPublic": False, "token": "a"},
        {"name": "New", "isPublic": False, "token": "b"},
    )
    assert changes == {"name": {"from": "Old", "to": "New"}}


def test_calculate_changes_needs_both_sides():
    audit = AuditLogger()
    assert audit.calculate_changes(None, {"name": "x"}) is None
    assert audit.calculate_changes({"name": "x"}, {"name": "x"}) is None


def test_disabled_audit_writes_nothing():
    with override_settings(HRMS_SETTINGS={"audit": {"enabled": False}}):
        audit = AuditLogger()
        with patch("hrms.audit.logger.AuditLogEntry.objects.create") as create:
            assert audit.log(action="CREATE", entity="REPORT_TEMPLATE") is None
        create.assert_not_called()


def test_sink_failures_are_logged_not_raised():
    audit = AuditLogger()
    with patch(
        "hrms.audit.logger.AuditLogEntry.objects.create", side_effect=RuntimeError("db down")
    ), patch("hrms.audit.logger.logger") as log:
        assert audit.log(action="DELETE", entity="REPORT_TEMPLATE", entity_id=1) is None
    log.error.assert_called_once()

"""
Unit tests for configuration lookups and row limits.
"""

import pytest
from django.test import override_settings

from hrms.config_proxy import get_setting
from hrms.reporting.engine import preview_row_limit, run_row_limit

pytestmark = pytest.mark.unit


def test_library_defaults_apply():
    assert get_setting("reporting.preview_row_limit") == 10
    assert get_setting("reporting.run_row_limit") == 1000
    assert get_setting("multitenancy.tenant_header") == "X-Tenant-ID"
    assert get_setting("reporting.missing_key", "fallback") == "fallback"


def test_project_settings_override_defaults():
    with override_settings(HRMS_SETTINGS={"reporting": {"recent_runs": 3}}):
        assert get_setting("reporting.recent_runs") == 3
        # untouched keys still come from the defaults
        assert get_setting("reporting.run_row_limit") == 1000


def test_preview_limit_is_capped_at_ten():
    assert preview_row_limit() == 10
    assert preview_row_limit(3) == 3
    assert preview_row_limit("500") == 10
    assert preview_row_limit(0) == 1
    with override_settings(HRMS_SETTINGS={"reporting": {"preview_row_limit": 50}}):
        assert preview_row_limit() == 10


def test_run_limit_is_capped_at_one_thousand():
    assert run_row_limit() == 1000
    with override_settings(HRMS_SETTINGS={"reporting": {"run_row_limit": 5000}}):
        assert run_row_limit() == 1000
    with override_settings(HRMS_SETTINGS={"reporting": {"run_row_limit": 25}}):
        assert run_row_limit() == 25

"""
Configuration management for the hrms application.

Settings are resolved hierarchically:
1. Django settings (``HRMS_SETTINGS``)
2. Library defaults (``LIBRARY_DEFAULTS``)
"""

from typing import Any, Optional

from django.conf import settings

from .defaults import LIBRARY_DEFAULTS


class SettingsProxy:
    """
    Proxy for accessing hrms settings with hierarchical resolution.

    Keys use dot notation (``"reporting.run_row_limit"``). A fresh proxy is
    built per lookup so ``override_settings`` in tests is always honoured.
    """

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a setting value with hierarchical resolution.

        Args:
            key: Setting key to retrieve
            default: Default value if setting is not found

        Returns:
            The setting value from the highest priority source
        """
        django_value = self._get_django_setting(key)
        if django_value is not None:
            return django_value

        library_value = self._get_nested_value(LIBRARY_DEFAULTS, key)
        if library_value is not None:
            return library_value

        return default

    def _get_django_setting(self, key: str) -> Any:
        return self._get_nested_value(getattr(settings, "HRMS_SETTINGS", {}), key)

    def _get_nested_value(self, data: dict[str, Any], key: str) -> Any:
        """
        Get nested value from dictionary using dot notation.

        Args:
            data: Dictionary to search in
            key: Key to retrieve (supports dot notation for nested access)

        Returns:
            The value or None if not found
        """
        if not isinstance(data, dict):
            return None

        current: Any = data
        for k in key.split("."):
            if not isinstance(current, dict) or k not in current:
                return None
            current = current[k]

        return current


def get_settings_proxy() -> SettingsProxy:
    return SettingsProxy()


def get_setting(key: str, default: Any = None) -> Any:
    """
    Get a setting value using the hierarchical settings system.

    Args:
        key: Setting key to retrieve
        default: Default value if setting is not found

    Returns:
        The setting value from the highest priority source
    """
    return get_settings_proxy().get(key, default)


__all__ = ["SettingsProxy", "get_settings_proxy", "get_setting"]

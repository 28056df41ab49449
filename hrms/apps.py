"""
Django app configuration for the hrms application.

This module configures:
- Report builder data source adapter verification
- Optional Sentry error capture
"""

import logging

from django.apps import AppConfig as BaseAppConfig

logger = logging.getLogger(__name__)


class AppConfig(BaseAppConfig):
    """Django app configuration for the hrms application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "hrms"
    verbose_name = "HRMS Report Builder"
    label = "hrms"

    def ready(self):
        """Initialize the application after Django has loaded."""
        logger.info("AppConfig.ready() method called - starting initialization")

        # A missing data source adapter is a programming error: fail loudly.
        self._verify_data_source_adapters()

        self._setup_observability()

        logger.info("HRMS report builder initialized successfully")

    def _verify_data_source_adapters(self):
        """Ensure every report data source has exactly one adapter."""
        from .reporting.adapters import verify_adapter_registry

        verify_adapter_registry()
        logger.debug("Report data source adapters verified")

    def _setup_observability(self):
        """Initialize Sentry when enabled in settings."""
        try:
            from .observability import setup_sentry

            setup_sentry()
        except Exception as e:
            logger.warning(f"Could not setup observability: {e}")

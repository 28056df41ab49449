"""
Models package for the report builder.
"""

from .template import ReportTemplate
from .generated import GeneratedReport

__all__ = ["ReportTemplate", "GeneratedReport"]

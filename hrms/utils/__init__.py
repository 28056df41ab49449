"""
Shared helpers for the hrms application.
"""

from .coercion import coerce_bool, coerce_int
from .sanitization import clean_text
from .serialization import json_sanitize

__all__ = ["coerce_bool", "coerce_int", "clean_text", "json_sanitize"]

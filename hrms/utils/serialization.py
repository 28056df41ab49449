"""JSON normalization helpers."""

from datetime import date, datetime, time
from decimal import Decimal
from typing import Any
from uuid import UUID

from django.utils.encoding import force_str
from django.utils.functional import Promise


def json_sanitize(value: Any) -> Any:
    """
    Convert values to JSON-serializable primitives.

    Report rows and summaries are returned through ``JsonResponse`` and
    graphene ``GenericScalar`` and stored in ``JSONField`` columns, none of
    which accept Decimals or dates, so everything passes through here first.
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value

    if isinstance(value, Promise):
        return force_str(value)

    if isinstance(value, (datetime, date, time)):
        return value.isoformat()

    if isinstance(value, Decimal):
        return float(value)

    if isinstance(value, UUID):
        return str(value)

    if isinstance(value, dict):
        return {str(key): json_sanitize(item) for key, item in value.items()}

    if isinstance(value, (list, tuple, set)):
        return [json_sanitize(item) for item in value]

    return force_str(value)

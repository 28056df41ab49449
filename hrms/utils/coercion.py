"""
Type coercion utilities.

Used wherever untrusted query-string or payload values must become typed
values without raising.
"""

from typing import Any, Optional


def coerce_int(
    value: Any,
    default: int = 0,
    *,
    minimum: Optional[int] = None,
    maximum: Optional[int] = None,
) -> int:
    """
    Coerce a value to an integer, optionally clamped.

    Examples:
        >>> coerce_int("42")
        42
        >>> coerce_int("invalid", default=5)
        5
        >>> coerce_int(500, maximum=100)
        100
    """
    if value is None or isinstance(value, bool):
        result = default
    else:
        try:
            result = int(value)
        except (ValueError, TypeError):
            result = default
    if minimum is not None and result < minimum:
        result = minimum
    if maximum is not None and result > maximum:
        result = maximum
    return result


def coerce_bool(value: Any, default: bool = False) -> bool:
    """
    Coerce a value to a boolean.

    Examples:
        >>> coerce_bool("true")
        True
        >>> coerce_bool(None, default=False)
        False
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "on")
    return bool(value)

"""
Sanitization utilities for user supplied text.
"""

import html
from typing import Any, Optional

import bleach


def clean_text(value: Any, *, max_length: Optional[int] = None) -> Optional[str]:
    """
    Strip markup from free text and trim surrounding whitespace.

    Entities are decoded before cleaning so encoded tags are stripped too.
    Returns None for None so optional fields stay optional.

    Examples:
        >>> clean_text("<b>Headcount</b> report ")
        'Headcount report'
    """
    if value is None:
        return None
    decoded = html.unescape(str(value))
    cleaned = bleach.clean(decoded, tags=[], attributes={}, strip=True).strip()
    if max_length is not None:
        cleaned = cleaned[:max_length]
    return cleaned

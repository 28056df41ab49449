"""Page/limit pagination for list endpoints."""

import math
from typing import Any

from django.db.models import QuerySet

from ...config_proxy import get_setting
from ...utils.coercion import coerce_int


def paginate(queryset: QuerySet, page: Any = None, limit: Any = None) -> tuple[list, dict[str, int]]:
    max_size = coerce_int(get_setting("reporting.max_page_size", 100), 100, minimum=1)
    default_size = coerce_int(
        get_setting("reporting.default_page_size", 20), 20, minimum=1, maximum=max_size
    )
    page = coerce_int(page, 1, minimum=1)
    limit = coerce_int(limit, default_size, minimum=1, maximum=max_size)

    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset : offset + limit])
    return items, {
        "total": total,
        "page": page,
        "limit": limit,
        "totalPages": math.ceil(total / limit) if total else 0,
    }

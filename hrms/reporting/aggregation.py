"""
Aggregation engine.

COUNT is the number of records handed in, whatever the field holds. SUM, AVG,
MIN and MAX only consider values that coerce to a finite number (int, float,
Decimal or numeric string; booleans excluded) and return 0 when none do.
"""

from __future__ import annotations

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Sequence, Union

from .paths import parse_path
from .types import AggregationSpec, AggregationType

Number = Union[int, float]


def to_number(value: Any) -> Optional[Number]:
    """Return ``value`` as an int or float, or None when it is not numeric."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, Decimal):
        return float(value) if value.is_finite() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
        if not parsed.is_finite():
            return None
        return float(parsed)
    return None


def aggregate(records: Sequence[Any], field_id: str, agg_type: Any) -> Number:
    agg_type = AggregationType(agg_type)
    if agg_type == AggregationType.COUNT:
        return len(records)

    path = parse_path(field_id)
    values = [
        number
        for number in (to_number(path.resolve(record)) for record in records)
        if number is not None
    ]
    if not values:
        return 0
    if agg_type == AggregationType.SUM:
        return sum(values)
    if agg_type == AggregationType.AVG:
        return sum(values) / len(values)
    if agg_type == AggregationType.MIN:
        return min(values)
    return max(values)


def summarize(
    records: Sequence[Any], aggregations: Iterable[AggregationSpec]
) -> dict[str, Number]:
    """Compute every aggregation over the full fetched set, keyed ``<field>_<TYPE>``."""
    return {spec.key: aggregate(records, spec.field, spec.type) for spec in aggregations}


__all__ = ["to_number", "aggregate", "summarize"]

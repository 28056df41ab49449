"""
Row projector.

Flattens the selected dot-paths of a fetched record into a row keyed by field
id. Missing relations project to None. Values are returned as fetched; JSON
normalization happens where rows leave the engine.
"""

from typing import Any, Iterable

from .paths import parse_path


def project(record: Any, selected_fields: Iterable[str]) -> dict[str, Any]:
    return {field_id: parse_path(field_id).resolve(record) for field_id in selected_fields}


def project_all(records: Iterable[Any], selected_fields: Iterable[str]) -> list[dict[str, Any]]:
    fields = tuple(selected_fields)
    return [project(record, fields) for record in records]


__all__ = ["project", "project_all"]

"""
Typed dot-path resolver.

A field id such as ``user.department.name`` is parsed once into a
``FieldPath``. The same object yields the ORM lookup path
(``user__department__name``), the relation chain to prefetch and the value
of the field on a fetched record, so the registry, compiler, projector and
aggregator all walk paths the same way.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Optional

from django.core.exceptions import FieldDoesNotExist
from django.db import models

MAX_SEGMENTS = 3

_SEGMENT_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9]*$")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_attribute(segment: str) -> str:
    """``reportingManager`` -> ``reporting_manager``."""
    return _CAMEL_BOUNDARY.sub("_", segment).lower()


@dataclass(frozen=True)
class FieldPath:
    field_id: str
    segments: tuple[str, ...]

    @property
    def attributes(self) -> tuple[str, ...]:
        return tuple(to_attribute(segment) for segment in self.segments)

    @property
    def relations(self) -> tuple[str, ...]:
        """Attribute names of the relations traversed before the leaf."""
        return self.attributes[:-1]

    @property
    def leaf(self) -> str:
        return self.attributes[-1]

    @property
    def orm_path(self) -> str:
        return "__".join(self.attributes)

    @property
    def relation_chain(self) -> Optional[str]:
        """``select_related`` path for the relations, or None for a local field."""
        if not self.relations:
            return None
        return "__".join(self.relations)

    def resolve(self, record: Any) -> Optional[Any]:
        """
        Walk the path on a fetched record.

        Returns None as soon as an intermediate relation is missing; never
        raises for absent data.
        """
        current = record
        for attribute, segment in zip(self.attributes, self.segments):
            if current is None:
                return None
            if isinstance(current, dict):
                current = current.get(segment, current.get(attribute))
            else:
                current = getattr(current, attribute, None)
        return current


@lru_cache(maxsize=1024)
def parse_path(field_id: str) -> FieldPath:
    """
    Parse a dot-delimited field id of one to three segments.

    Raises ``ValueError`` on a malformed id; callers validate ids against the
    field registry first, so this only trips on programming errors.
    """
    segments = tuple(str(field_id).split("."))
    if not 1 <= len(segments) <= MAX_SEGMENTS:
        raise ValueError(f"Field path must have 1 to {MAX_SEGMENTS} segments: {field_id}")
    for segment in segments:
        if not _SEGMENT_PATTERN.match(segment):
            raise ValueError(f"Invalid field path segment '{segment}' in {field_id}")
    return FieldPath(field_id=str(field_id), segments=segments)


def resolve_model_field(model: type[models.Model], path: FieldPath) -> models.Field:
    """
    Return the concrete model field a path ends on.

    Every intermediate segment must be a forward many-to-one or one-to-one
    relation. Raises ``FieldDoesNotExist`` otherwise.
    """
    current = model
    for relation in path.relations:
        field = current._meta.get_field(relation)
        if not (field.many_to_one or field.one_to_one) or field.auto_created:
            raise FieldDoesNotExist(
                f"{current.__name__}.{relation} is not a forward relation"
            )
        current = field.related_model
    field = current._meta.get_field(path.leaf)
    if field.is_relation:
        raise FieldDoesNotExist(f"{current.__name__}.{path.leaf} is a relation, not a value")
    return field


__all__ = [
    "MAX_SEGMENTS",
    "FieldPath",
    "to_attribute",
    "parse_path",
    "resolve_model_field",
]

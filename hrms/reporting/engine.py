"""
Report engine: compile, scope, fetch, project and aggregate.

Preview and run share this pipeline and differ only in row limit, runtime
parameters and whether the result is persisted (runs persist through
``services.runs``).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

from ..config_proxy import get_setting
from ..defaults import PREVIEW_ROW_CEILING, RUN_ROW_CEILING
from ..utils.coercion import coerce_int
from ..utils.serialization import json_sanitize
from .adapters import ADAPTERS, DataSourceAdapter
from .aggregation import summarize
from .compiler import (
    CompiledQuery,
    apply_default_filters,
    apply_parameters,
    compile_report,
    scope_to_tenant,
)
from .projector import project_all
from .registry import field_meta
from .types import DataSource, ReportSpec

logger = logging.getLogger(__name__)


def preview_row_limit(requested: Any = None) -> int:
    """Configured preview limit, clamped to the hard ceiling; callers may ask for fewer."""
    configured = coerce_int(
        get_setting("reporting.preview_row_limit", PREVIEW_ROW_CEILING),
        PREVIEW_ROW_CEILING,
        minimum=1,
        maximum=PREVIEW_ROW_CEILING,
    )
    if requested in (None, ""):
        return configured
    return coerce_int(requested, configured, minimum=1, maximum=configured)


def run_row_limit() -> int:
    return coerce_int(
        get_setting("reporting.run_row_limit", RUN_ROW_CEILING),
        RUN_ROW_CEILING,
        minimum=1,
        maximum=RUN_ROW_CEILING,
    )


@dataclass
class ReportResult:
    data_source: DataSource
    selected_fields: tuple[str, ...]
    data: list[dict[str, Any]]
    summary: dict[str, Any] = field(default_factory=dict)
    field_meta: list[dict[str, Any]] = field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.data)


class ReportEngine:
    """Executes report definitions for one tenant."""

    def __init__(
        self,
        tenant_id: Any,
        adapters: Optional[Mapping[DataSource, DataSourceAdapter]] = None,
    ):
        if tenant_id in (None, ""):
            raise ValueError("ReportEngine requires a tenant")
        self.tenant_id = tenant_id
        self.adapters = adapters if adapters is not None else ADAPTERS

    def prepare(
        self,
        spec: Union[ReportSpec, Mapping[str, Any]],
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> CompiledQuery:
        compiled = compile_report(spec)
        compiled = apply_parameters(compiled, parameters)
        compiled = apply_default_filters(compiled)
        return scope_to_tenant(compiled, self.tenant_id)

    def execute(
        self,
        spec: Union[ReportSpec, Mapping[str, Any]],
        *,
        limit: int,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> ReportResult:
        compiled = self.prepare(spec, parameters)
        adapter = self.adapters[compiled.data_source]
        records = adapter.fetch(compiled, limit)

        rows = project_all(records, compiled.selected_fields)
        summary = summarize(records, compiled.aggregations)

        return ReportResult(
            data_source=compiled.data_source,
            selected_fields=compiled.selected_fields,
            data=json_sanitize(rows),
            summary=json_sanitize(summary),
            field_meta=field_meta(compiled.data_source, compiled.selected_fields),
        )

    def preview(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Run an unsaved definition with the preview cap; nothing is persisted."""
        result = self.execute(payload, limit=preview_row_limit(payload.get("limit")))
        logger.debug(
            "Preview of %s returned %d rows", result.data_source.value, result.row_count
        )
        return {
            "preview": True,
            "data": result.data,
            "rowCount": result.row_count,
            "fieldMeta": result.field_meta,
        }


__all__ = [
    "ReportEngine",
    "ReportResult",
    "preview_row_limit",
    "run_row_limit",
]

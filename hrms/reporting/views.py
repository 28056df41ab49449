"""
HTTP API for the report builder.

Every view resolves the acting employee first, calls the service layer and
wraps the result in the ``{"timestamp", "status", "data"}`` envelope.
``ReportingError`` subclasses become error responses carrying their code;
anything else is logged, sent to Sentry when enabled and answered with 500.
"""

import json
import logging
from datetime import datetime
from typing import Any, Optional

from django.http import HttpRequest, JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from ..observability import capture_exception
from . import services
from .registry import describe_fields
from .services.access import ReportingActor
from .types import InvalidReportSpec, ReportingError

logger = logging.getLogger(__name__)


@method_decorator(csrf_exempt, name="dispatch")
class BaseAPIView(View):
    """Base class for report builder endpoints."""

    _json_body_cache_attr = "_hrms_json_body_cache"

    def dispatch(self, request: HttpRequest, *args, **kwargs):
        if request.method == "OPTIONS":
            return super().dispatch(request, *args, **kwargs)
        try:
            request.actor = services.resolve_actor(request)
            return super().dispatch(request, *args, **kwargs)
        except ReportingError as exc:
            logger.warning(
                "%s %s rejected: %s (%s)", request.method, request.path, exc.message, exc.code
            )
            return self.error_response(
                exc.message, status=exc.status_code, code=exc.code, details=exc.details
            )
        except Exception as exc:
            logger.exception("Unhandled error in %s", self.__class__.__name__)
            capture_exception(exc, tags={"view": self.__class__.__name__})
            return self.error_response(
                "Internal server error", status=500, code="INTERNAL_ERROR"
            )

    def options(self, request: HttpRequest, *args, **kwargs):
        """Handle preflight requests."""
        return JsonResponse({}, status=200)

    def json_response(self, data: Any, status: int = 200) -> JsonResponse:
        return JsonResponse(
            {
                "timestamp": datetime.now().isoformat(),
                "status": "success" if 200 <= status < 300 else "error",
                "data": data,
            },
            status=status,
        )

    def error_response(
        self,
        message: str,
        status: int = 400,
        code: str = "BAD_REQUEST",
        details: Optional[dict] = None,
    ) -> JsonResponse:
        return self.json_response(
            {"message": message, "code": code, "details": details or {}}, status=status
        )

    def parse_json_body(self, request: HttpRequest) -> dict[str, Any]:
        """Parse the JSON object body; an empty body reads as ``{}``."""
        cached = getattr(request, self._json_body_cache_attr, None)
        if cached is not None:
            return cached
        if not request.body:
            parsed: Any = {}
        else:
            try:
                parsed = json.loads(request.body.decode("utf-8"))
            except (UnicodeDecodeError, json.JSONDecodeError) as exc:
                raise InvalidReportSpec(
                    "Request body must be valid JSON", details={"error": str(exc)}
                ) from None
        if not isinstance(parsed, dict):
            raise InvalidReportSpec("Request body must be a JSON object")
        setattr(request, self._json_body_cache_attr, parsed)
        return parsed

    @staticmethod
    def actor(request: HttpRequest) -> ReportingActor:
        return request.actor


class FieldCatalogAPIView(BaseAPIView):
    def get(self, request: HttpRequest):
        return self.json_response(describe_fields(request.GET.get("dataSource")))


class BuilderStatsAPIView(BaseAPIView):
    def get(self, request: HttpRequest):
        return self.json_response(services.builder_stats(self.actor(request)))


class PreviewAPIView(BaseAPIView):
    def post(self, request: HttpRequest):
        payload = self.parse_json_body(request)
        return self.json_response(services.preview_report(self.actor(request), payload))


class TemplateListAPIView(BaseAPIView):
    def get(self, request: HttpRequest):
        return self.json_response(services.list_templates(self.actor(request), request.GET))

    def post(self, request: HttpRequest):
        created = services.create_template(
            self.actor(request), self.parse_json_body(request), request=request
        )
        return self.json_response(created, status=201)


class TemplateDetailAPIView(BaseAPIView):
    def get(self, request: HttpRequest, template_id: int):
        return self.json_response(services.get_template(self.actor(request), template_id))

    def put(self, request: HttpRequest, template_id: int):
        updated = services.update_template(
            self.actor(request), template_id, self.parse_json_body(request), request=request
        )
        return self.json_response(updated)

    def delete(self, request: HttpRequest, template_id: int):
        return self.json_response(
            services.delete_template(self.actor(request), template_id, request=request)
        )


class TemplateDuplicateAPIView(BaseAPIView):
    def post(self, request: HttpRequest, template_id: int):
        created = services.duplicate_template(
            self.actor(request), template_id, self.parse_json_body(request), request=request
        )
        return self.json_response(created, status=201)


class TemplateRunAPIView(BaseAPIView):
    def post(self, request: HttpRequest, template_id: int):
        body = self.parse_json_body(request)
        parameters = body.get("parameters") or {}
        if not isinstance(parameters, dict):
            raise InvalidReportSpec("parameters must be an object")
        report = services.run_template(
            self.actor(request), template_id, parameters, request=request
        )
        return self.json_response(report)


class GeneratedReportListAPIView(BaseAPIView):
    def get(self, request: HttpRequest):
        return self.json_response(
            services.list_generated_reports(self.actor(request), request.GET)
        )


class GeneratedReportDetailAPIView(BaseAPIView):
    def get(self, request: HttpRequest, report_id: int):
        return self.json_response(
            services.get_generated_report(self.actor(request), report_id)
        )

    def delete(self, request: HttpRequest, report_id: int):
        return self.json_response(
            services.delete_generated_report(self.actor(request), report_id)
        )

"""
GraphQL schema for the report builder.

Resolvers call the same service functions as the REST views. Report payloads
are returned as ``GenericScalar`` so both surfaces share one JSON shape;
``ReportingError`` becomes a ``GraphQLError`` with ``extensions.code``.
"""

import functools
import logging
from typing import Any, Callable, Optional

import graphene
from graphene.types.generic import GenericScalar
from graphql import GraphQLError

from ..observability import capture_exception
from . import services
from .registry import data_source_summaries, describe_fields
from .types import ReportingError

logger = logging.getLogger(__name__)


def _to_graphql_error(exc: ReportingError) -> GraphQLError:
    return GraphQLError(
        exc.message,
        extensions={"code": exc.code, "status": exc.status_code, "details": exc.details},
    )


def reporting_resolver(func: Callable[..., Any]) -> Callable[..., Any]:
    """Resolve the acting employee and translate reporting errors."""

    @functools.wraps(func)
    def wrapper(root, info, **kwargs):
        try:
            actor = services.resolve_actor(info.context)
            return func(actor, info, **kwargs)
        except ReportingError as exc:
            logger.warning("GraphQL %s rejected: %s (%s)", func.__name__, exc.message, exc.code)
            raise _to_graphql_error(exc) from None
        except GraphQLError:
            raise
        except Exception as exc:
            logger.exception("Unhandled error in GraphQL resolver %s", func.__name__)
            capture_exception(exc, tags={"resolver": func.__name__})
            raise GraphQLError(
                "Internal server error", extensions={"code": "INTERNAL_ERROR"}
            ) from None

    return wrapper


def _list_params(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value is not None}


class ReportQuery(graphene.ObjectType):
    report_data_sources = GenericScalar()
    report_fields = GenericScalar(data_source=graphene.String(required=False))
    report_templates = GenericScalar(
        data_source=graphene.String(required=False),
        is_public=graphene.Boolean(required=False),
        search=graphene.String(required=False),
        page=graphene.Int(required=False),
        limit=graphene.Int(required=False),
    )
    report_template = GenericScalar(id=graphene.ID(required=True))
    generated_reports = GenericScalar(
        template_id=graphene.ID(required=False),
        page=graphene.Int(required=False),
        limit=graphene.Int(required=False),
    )
    generated_report = GenericScalar(id=graphene.ID(required=True))
    report_builder_stats = GenericScalar()

    @staticmethod
    @reporting_resolver
    def resolve_report_data_sources(actor, info):
        return data_source_summaries()

    @staticmethod
    @reporting_resolver
    def resolve_report_fields(actor, info, data_source: Optional[str] = None):
        return describe_fields(data_source)

    @staticmethod
    @reporting_resolver
    def resolve_report_templates(
        actor,
        info,
        data_source: Optional[str] = None,
        is_public: Optional[bool] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        params = _list_params(
            dataSource=data_source, isPublic=is_public, search=search, page=page, limit=limit
        )
        return services.list_templates(actor, params)

    @staticmethod
    @reporting_resolver
    def resolve_report_template(actor, info, id: str):
        return services.get_template(actor, id)

    @staticmethod
    @reporting_resolver
    def resolve_generated_reports(
        actor,
        info,
        template_id: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        params = _list_params(templateId=template_id, page=page, limit=limit)
        return services.list_generated_reports(actor, params)

    @staticmethod
    @reporting_resolver
    def resolve_generated_report(actor, info, id: str):
        return services.get_generated_report(actor, id)

    @staticmethod
    @reporting_resolver
    def resolve_report_builder_stats(actor, info):
        return services.builder_stats(actor)


class PreviewReport(graphene.Mutation):
    class Arguments:
        definition = GenericScalar(required=True)

    result = GenericScalar()

    @staticmethod
    @reporting_resolver
    def mutate(actor, info, definition):
        return PreviewReport(result=services.preview_report(actor, definition))


class CreateReportTemplate(graphene.Mutation):
    class Arguments:
        input = GenericScalar(required=True)

    template = GenericScalar()

    @staticmethod
    @reporting_resolver
    def mutate(actor, info, input):
        created = services.create_template(actor, input, request=info.context)
        return CreateReportTemplate(template=created)


class UpdateReportTemplate(graphene.Mutation):
    class Arguments:
        id = graphene.ID(required=True)
        input = GenericScalar(required=True)

    template = GenericScalar()

    @staticmethod
    @reporting_resolver
    def mutate(actor, info, id, input):
        updated = services.update_template(actor, id, input, request=info.context)
        return UpdateReportTemplate(template=updated)


class DeleteReportTemplate(graphene.Mutation):
    class Arguments:
        id = graphene.ID(required=True)

    ok = graphene.Boolean()
    id = graphene.ID()

    @staticmethod
    @reporting_resolver
    def mutate(actor, info, id):
        result = services.delete_template(actor, id, request=info.context)
        return DeleteReportTemplate(ok=result["deleted"], id=result["id"])


class DuplicateReportTemplate(graphene.Mutation):
    class Arguments:
        id = graphene.ID(required=True)
        name = graphene.String(required=False)

    template = GenericScalar()

    @staticmethod
    @reporting_resolver
    def mutate(actor, info, id, name=None):
        payload = {"name": name} if name else {}
        created = services.duplicate_template(actor, id, payload, request=info.context)
        return DuplicateReportTemplate(template=created)


class RunReportTemplate(graphene.Mutation):
    class Arguments:
        id = graphene.ID(required=True)
        parameters = GenericScalar(required=False)

    report = GenericScalar()

    @staticmethod
    @reporting_resolver
    def mutate(actor, info, id, parameters=None):
        if parameters is not None and not isinstance(parameters, dict):
            raise GraphQLError(
                "parameters must be an object", extensions={"code": "INVALID_REPORT_SPEC"}
            )
        report = services.run_template(actor, id, parameters, request=info.context)
        return RunReportTemplate(report=report)


class DeleteGeneratedReport(graphene.Mutation):
    class Arguments:
        id = graphene.ID(required=True)

    ok = graphene.Boolean()
    id = graphene.ID()

    @staticmethod
    @reporting_resolver
    def mutate(actor, info, id):
        result = services.delete_generated_report(actor, id)
        return DeleteGeneratedReport(ok=result["deleted"], id=result["id"])


class ReportMutation(graphene.ObjectType):
    preview_report = PreviewReport.Field()
    create_report_template = CreateReportTemplate.Field()
    update_report_template = UpdateReportTemplate.Field()
    delete_report_template = DeleteReportTemplate.Field()
    duplicate_report_template = DuplicateReportTemplate.Field()
    run_report_template = RunReportTemplate.Field()
    delete_generated_report = DeleteGeneratedReport.Field()


schema = graphene.Schema(query=ReportQuery, mutation=ReportMutation)

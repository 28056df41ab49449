"""
Root URL configuration.

- ``api/v1/report-builder/``: REST API
- ``graphql/``: GraphQL endpoint for the same operations
"""

from django.urls import include, path
from django.views.decorators.csrf import csrf_exempt
from graphene_django.views import GraphQLView

urlpatterns = [
    path("api/v1/report-builder/", include("hrms.reporting.urls")),
    path("graphql/", csrf_exempt(GraphQLView.as_view(graphiql=False)), name="graphql"),
]

"""
FastAPI router for the GraphQL endpoint.

Endpoints:
- GET  {path} - Query via URL parameters, or GraphiQL for browsers
- POST {path} - Query via request body (JSON, form, multipart, application/graphql)

Any other method is answered with 405.

Request flow:
    request -> body resolver -> params -> parse + validate -> execute
            -> envelope + status -> JSON or GraphiQL
"""

from __future__ import annotations

import inspect
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response
from graphql import (
    ASTValidationRule,
    DocumentNode,
    GraphQLError,
    GraphQLSchema,
    OperationType,
    parse,
    specified_rules,
    validate,
)
from graphql import execute as graphql_execute
from graphql.utilities import get_operation_ast

from ..core.body import DEFAULT_BODY_LIMIT, resolve_body
from ..core.errors import GraphQLOptionsError, graphql_error
from ..core.negotiation import can_display_graphiql
from ..core.params import GraphQLParams, get_graphql_params
from ..core.request import RawRequest
from ..playground import get_graphiql_html
from ..runtime.context import ExecuteFn, ExtensionsFn, FormatErrorFn
from ..runtime.executor import execute_document
from ..runtime.response import ResponseChannel, handle_error, handle_result

logger = logging.getLogger(__name__)


ALLOWED_METHODS = ("GET", "POST")


@dataclass
class GraphQLOptions:
    """
    Configuration of a GraphQL endpoint.

    - schema: The schema to execute against (required)
    - root_value: Root value for top-level resolvers
    - context: Context value; defaults to the Starlette request
    - pretty: Indent JSON responses
    - graphiql: Offer GraphiQL to browsers
    - format_error: Formatter for execution errors
    - extensions: Hook producing the result's ``extensions`` block
    - validation_rules: Rules run in addition to the specified ones
    - execute_fn: Execution capability (graphql-core's ``execute`` by default)
    - body_limit: Maximum request body size in bytes
    """
    schema: GraphQLSchema
    root_value: Any = None
    context: Any = None
    pretty: bool = False
    graphiql: bool = False
    format_error: Optional[FormatErrorFn] = None
    extensions: Optional[ExtensionsFn] = None
    validation_rules: Sequence[type[ASTValidationRule]] = field(default_factory=tuple)
    execute_fn: ExecuteFn = graphql_execute
    body_limit: int = DEFAULT_BODY_LIMIT

    def __post_init__(self):
        if not isinstance(self.schema, GraphQLSchema):
            raise GraphQLOptionsError("GraphQL middleware options must contain a schema.")


OptionsProvider = Callable[[Request], Union[GraphQLOptions, Awaitable[GraphQLOptions]]]


class PrettyJSONResponse(JSONResponse):
    """JSON response indented for humans."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


class GraphQLHTTP:
    """
    GraphQL-over-HTTP request handler.

    Usage:
        handler = GraphQLHTTP(GraphQLOptions(schema=schema, graphiql=True))
        response = await handler(request)
    """

    def __init__(self, options: Union[GraphQLOptions, OptionsProvider]):
        self._options = options

    async def resolve_options(self, request: Request) -> GraphQLOptions:
        """Static options, or options computed for this request."""
        if isinstance(self._options, GraphQLOptions):
            return self._options

        options = self._options(request)
        if inspect.isawaitable(options):
            options = await options
        if not isinstance(options, GraphQLOptions):
            raise GraphQLOptionsError("GraphQL middleware option function must return GraphQLOptions.")
        return options

    async def __call__(self, request: Request) -> Response:
        channel = ResponseChannel()
        params: Optional[GraphQLParams] = None
        show_graphiql = False
        pretty = False

        try:
            options = await self.resolve_options(request)
            pretty = options.pretty

            if request.method not in ALLOWED_METHODS:
                raise graphql_error(
                    405,
                    [{"message": "GraphQL only supports GET and POST requests."}],
                    Allow=", ".join(ALLOWED_METHODS),
                )

            raw = RawRequest.from_starlette(request)
            body = await resolve_body(raw, limit=options.body_limit)
            params = get_graphql_params(request.query_params, body)
            show_graphiql = options.graphiql and can_display_graphiql(raw, params)

            if not params.query:
                if show_graphiql:
                    return self.render_graphiql(params, None)
                raise graphql_error(400, [{"message": "Must provide query string."}])

            document = self.parse_and_validate(options, params.query)

            if request.method == "GET":
                operation = get_operation_ast(document, params.operation_name)
                if operation is not None and operation.operation != OperationType.QUERY:
                    # GraphiQL can still show the mutation for editing
                    if show_graphiql:
                        return self.render_graphiql(params, None)
                    raise graphql_error(
                        405,
                        [{"message": f"Can only perform a {operation.operation.value} operation from a POST request."}],
                        Allow="POST",
                    )

            context = options.context if options.context is not None else request
            result = await execute_document(
                options.schema,
                options.root_value,
                context,
                options.extensions,
                document,
                params.variables,
                params.operation_name,
                execute_fn=options.execute_fn,
            )
            envelope = handle_result(channel, result, options.format_error)

        except Exception as e:
            envelope = handle_error(channel, e)

        logger.debug(f"{request.method} {request.url.path} -> {channel.status_code}")

        if show_graphiql and params is not None:
            return self.render_graphiql(params, envelope, channel)

        response_class = PrettyJSONResponse if pretty else JSONResponse
        return response_class(envelope, status_code=channel.status_code, headers=channel.headers)

    def parse_and_validate(self, options: GraphQLOptions, query: str) -> DocumentNode:
        """Parse the query and run validation; both fail with a 400."""
        try:
            document = parse(query)
        except GraphQLError as e:
            raise graphql_error(400, [e]) from e

        errors = validate(options.schema, document, [*specified_rules, *options.validation_rules])
        if errors:
            raise graphql_error(400, errors)

        return document

    @staticmethod
    def render_graphiql(
        params: GraphQLParams,
        envelope: Optional[dict[str, Any]],
        channel: Optional[ResponseChannel] = None,
    ) -> HTMLResponse:
        status_code = channel.status_code if channel else 200
        headers = channel.headers if channel else None
        return HTMLResponse(get_graphiql_html(params, envelope), status_code=status_code, headers=headers)


def create_graphql_router(
    options: Union[GraphQLOptions, OptionsProvider],
    path: str = "/graphql",
) -> APIRouter:
    """
    Create a router exposing a GraphQL endpoint.

    Args:
        options: Endpoint options, or a function computing them per request
        path: URL path of the endpoint

    Returns:
        Configured FastAPI router

    Example:
        from fastapi import FastAPI
        from gqlhttp import GraphQLOptions, create_graphql_router

        app = FastAPI()
        app.include_router(create_graphql_router(GraphQLOptions(schema=schema, graphiql=True)))
    """
    router = APIRouter()
    handler = GraphQLHTTP(options)

    async def graphql_endpoint(request: Request) -> Response:
        """GraphQL endpoint."""
        return await handler(request)

    # Every method is routed here so unsupported ones get a GraphQL-shaped 405
    router.add_api_route(
        path,
        graphql_endpoint,
        methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"],
        include_in_schema=False,
    )

    return router

"""
gqlhttp - GraphQL over HTTP for FastAPI/Starlette.

Turns HTTP requests into GraphQL executions and back:
- Body parsing by Content-Type (JSON, form, multipart, application/graphql)
- Execution with an optional extensions hook
- Spec-shaped error envelopes with status codes
- GraphiQL for browsers that ask for HTML

Usage:
    from fastapi import FastAPI
    from gqlhttp import GraphQLOptions, create_graphql_router

    app = FastAPI()
    app.include_router(create_graphql_router(GraphQLOptions(schema=schema, graphiql=True)))
"""

from __future__ import annotations

from .api import GraphQLHTTP, GraphQLOptions, create_graphql_router
from .config import ServerConfig, load_config
from .core import (
    BodyError,
    BodyStrategy,
    ContentTypeInfo,
    GenericError,
    GQLHttpError,
    GraphQLOptionsError,
    GraphQLParams,
    ProtocolError,
    RawRequest,
    accepts_types,
    can_display_graphiql,
    get_graphql_params,
    graphql_error,
    resolve_body,
)
from .playground import get_graphiql_html
from .runtime import (
    ExtensionContext,
    ResponseChannel,
    default_format_error,
    execute_document,
    handle_error,
    handle_result,
)
from .server import GraphQLServer

__version__ = "0.1.0"

__all__ = [
    # API
    "GraphQLHTTP",
    "GraphQLOptions",
    "create_graphql_router",
    # Body resolver
    "RawRequest",
    "ContentTypeInfo",
    "BodyStrategy",
    "resolve_body",
    # Params
    "GraphQLParams",
    "get_graphql_params",
    # Negotiation
    "accepts_types",
    "can_display_graphiql",
    # Errors
    "GQLHttpError",
    "ProtocolError",
    "BodyError",
    "GraphQLOptionsError",
    "GenericError",
    "graphql_error",
    # Runtime
    "ExtensionContext",
    "ResponseChannel",
    "execute_document",
    "handle_result",
    "handle_error",
    "default_format_error",
    # Server
    "GraphQLServer",
    "ServerConfig",
    "load_config",
    # Playground
    "get_graphiql_html",
]

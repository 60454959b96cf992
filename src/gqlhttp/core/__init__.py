"""
Core module - request parsing, negotiation and errors.
"""

from __future__ import annotations

from .body import (
    DEFAULT_BODY_LIMIT,
    BodyStrategy,
    Payload,
    STRATEGIES,
    parse_graphql,
    parse_json,
    parse_multipart,
    parse_urlencoded,
    read_body,
    resolve_body,
    select_strategy,
)
from .content_type import ContentTypeInfo
from .errors import (
    BodyError,
    Failure,
    GenericError,
    GQLHttpError,
    GraphQLOptionsError,
    ProtocolError,
    as_failure,
    graphql_error,
)
from .negotiation import accepts_types, can_display_graphiql, parse_accept
from .params import GraphQLParams, get_graphql_params
from .request import RawRequest

__all__ = [
    # Body resolver
    "DEFAULT_BODY_LIMIT",
    "BodyStrategy",
    "Payload",
    "STRATEGIES",
    "parse_graphql",
    "parse_json",
    "parse_multipart",
    "parse_urlencoded",
    "read_body",
    "resolve_body",
    "select_strategy",
    "ContentTypeInfo",
    "RawRequest",
    # Errors
    "GQLHttpError",
    "ProtocolError",
    "BodyError",
    "GraphQLOptionsError",
    "GenericError",
    "Failure",
    "as_failure",
    "graphql_error",
    # Negotiation
    "accepts_types",
    "can_display_graphiql",
    "parse_accept",
    # Params
    "GraphQLParams",
    "get_graphql_params",
]

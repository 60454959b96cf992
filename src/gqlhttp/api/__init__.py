"""
API module - FastAPI endpoint.
"""

from __future__ import annotations

from .router import (
    GraphQLHTTP,
    GraphQLOptions,
    OptionsProvider,
    PrettyJSONResponse,
    create_graphql_router,
)

__all__ = [
    "GraphQLHTTP",
    "GraphQLOptions",
    "OptionsProvider",
    "PrettyJSONResponse",
    "create_graphql_router",
]

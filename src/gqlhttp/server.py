"""
GraphQL server - main entry point for creating a FastAPI application.

Usage:
    from gqlhttp import GraphQLServer

    server = GraphQLServer(schema, root_value=Root())

    app = server.app
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from graphql import ASTValidationRule, GraphQLSchema

from .api import GraphQLOptions, create_graphql_router
from .config import ServerConfig
from .runtime.context import ExtensionsFn, FormatErrorFn

logger = logging.getLogger(__name__)


class HealthcheckLogFilter(logging.Filter):
    """Filter out noisy healthcheck access logs."""

    FILTERED_PATHS = ("/health",)

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        for path in self.FILTERED_PATHS:
            if f'"{path}' in message or f" {path} " in message:
                return False
        return True


def _setup_logging_filter():
    """Add filter to uvicorn access logger to suppress healthcheck logs."""
    uvicorn_access = logging.getLogger("uvicorn.access")
    if not any(isinstance(f, HealthcheckLogFilter) for f in uvicorn_access.filters):
        uvicorn_access.addFilter(HealthcheckLogFilter())


class GraphQLServer:
    """
    FastAPI application serving one GraphQL schema.

    Features:
    - GraphQL endpoint at ``config.path`` (GET, POST, GraphiQL)
    - CORS middleware
    - Health check endpoint
    """

    def __init__(
        self,
        schema: GraphQLSchema,
        *,
        config: Optional[ServerConfig] = None,
        root_value: Any = None,
        context: Any = None,
        format_error: Optional[FormatErrorFn] = None,
        extensions: Optional[ExtensionsFn] = None,
        validation_rules: Sequence[type[ASTValidationRule]] = (),
        title: str = "GraphQL Server",
    ):
        """
        Initialize server.

        Args:
            schema: Schema to serve
            config: Server settings (defaults to ServerConfig())
            root_value: Root value for top-level resolvers
            context: Context value; defaults to the request
            format_error: Formatter for execution errors
            extensions: Hook producing the result's ``extensions`` block
            validation_rules: Extra validation rules
            title: FastAPI app title
        """
        self.config = config or ServerConfig()
        self.title = title
        self.options = GraphQLOptions(
            schema=schema,
            root_value=root_value,
            context=context,
            pretty=self.config.pretty,
            graphiql=self.config.graphiql,
            format_error=format_error,
            extensions=extensions,
            validation_rules=tuple(validation_rules),
            body_limit=self.config.body_limit,
        )

        self.app = self._create_app()

        # Store reference to server on app
        self.app.state.graphql_server = self

    def _create_app(self) -> FastAPI:
        """Create FastAPI application."""
        _setup_logging_filter()

        app = FastAPI(
            title=self.title,
            description="GraphQL over HTTP",
            version="1.0.0",
        )

        # CORS
        app.add_middleware(
            CORSMiddleware,
            allow_origins=self.config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

        app.include_router(create_graphql_router(self.options, path=self.config.path))

        # Health check
        @app.get("/health")
        async def health():
            return {"status": "ok"}

        logger.info(
            f"GraphQL endpoint mounted at {self.config.path} "
            f"(graphiql={'on' if self.config.graphiql else 'off'})"
        )

        return app

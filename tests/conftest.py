"""Shared fixtures: a small schema with resolvers on the root value."""

from __future__ import annotations

import httpx
import pytest
from fastapi import FastAPI
from graphql import GraphQLSchema, build_schema

from gqlhttp import GraphQLOptions, create_graphql_router


SDL = """
type Query {
    hello(name: String): String
    slowHello(name: String): String
    boom: String
    nonNullBoom: String!
    contextType: String
}

type Mutation {
    writeTest: Query
}
"""


class Root:
    def hello(self, info, name=None):
        return f"Hello {name or 'World'}"

    async def slowHello(self, info, name=None):
        return f"Hello {name or 'World'}"

    def boom(self, info):
        raise ValueError("Boom!")

    def nonNullBoom(self, info):
        raise ValueError("Boom!")

    def contextType(self, info):
        return type(info.context).__name__

    def writeTest(self, info):
        return self


@pytest.fixture
def schema() -> GraphQLSchema:
    return build_schema(SDL)


@pytest.fixture
def root() -> Root:
    return Root()


@pytest.fixture
def make_client(schema, root):
    """Factory building an httpx client around a FastAPI app serving the schema."""

    def factory(provider=None, **options) -> httpx.AsyncClient:
        if provider is None:
            options.setdefault("root_value", root)
            provider = GraphQLOptions(schema=schema, **options)
        app = FastAPI()
        app.include_router(create_graphql_router(provider))
        return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")

    return factory

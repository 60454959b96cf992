"""
Minimal server example.

Usage:
    uvicorn main:app --reload

    curl -X POST http://localhost:8000/graphql \
        -H 'Content-Type: application/graphql' \
        -d '{ hello(name: "Ivan") }'
"""

from graphql import build_schema

from gqlhttp import GraphQLServer

schema = build_schema(
    """
    type Query {
        hello(name: String): String
    }
    """
)


class Root:
    def hello(self, info, name=None):
        return f"Hello {name or 'World'}"


server = GraphQLServer(schema, root_value=Root())

app = server.app

"""
GraphQL request parameters merged from the query string and the body.
"""

from __future__ import annotations

import json
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import graphql_error


class GraphQLParams(BaseModel):
    """Parameters of a single GraphQL-over-HTTP request."""

    model_config = ConfigDict(populate_by_name=True)

    query: Optional[str] = None
    variables: Optional[dict[str, Any]] = None
    operation_name: Optional[str] = Field(default=None, alias="operationName")
    raw: bool = False


def _parse_variables(value: Any) -> Optional[dict[str, Any]]:
    if value is None or value == "":
        return None

    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            raise graphql_error(400, [{"message": "Variables are invalid JSON."}])

    if value is None:
        return None
    if not isinstance(value, dict):
        raise graphql_error(400, [{"message": "Variables must be an object."}])
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def get_graphql_params(
    url_data: Mapping[str, Any],
    body_data: Mapping[str, Any],
) -> GraphQLParams:
    """
    Merge URL and body parameters; the query string wins.

    ``variables`` may arrive as a JSON string (GET requests, form bodies).
    ``raw`` is set when either source mentions it at all.
    """
    query = url_data.get("query") or body_data.get("query")
    variables = url_data.get("variables") or body_data.get("variables")
    operation_name = url_data.get("operationName") or body_data.get("operationName")

    return GraphQLParams(
        query=_optional_str(query),
        variables=_parse_variables(variables),
        operation_name=_optional_str(operation_name),
        raw="raw" in url_data or "raw" in body_data,
    )
